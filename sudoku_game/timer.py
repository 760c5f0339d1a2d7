"""
Cancellable once-per-second tick handles owned by a game session.

The session calls start() with its tick callback when a game begins and
cancel() when the game ends. Only one game is ever ticking: starting a
handle that is already running cancels the previous schedule first.
"""
import pygame

TICK_INTERVAL_MS = 1000
TICK_EVENT = pygame.USEREVENT + 1


class Ticker:
    def __init__(self):
        self.callback = None

    @property
    def running(self):
        return self.callback is not None

    def start(self, callback):
        self.cancel()
        self.callback = callback
        self._arm()

    def cancel(self):
        if self.callback is None:
            return
        self._disarm()
        self.callback = None

    def fire(self):
        """Delivers one tick. Ignored after cancel()."""
        if self.callback is not None:
            self.callback()

    def _arm(self):
        pass

    def _disarm(self):
        pass


class ManualTicker(Ticker):
    """Ticks only when fire() is called. Used headless and in tests."""


class PygameTicker(Ticker):
    """Posts TICK_EVENT every second; the event loop forwards it to fire()."""

    def __init__(self, event_type=TICK_EVENT):
        super().__init__()
        self.event_type = event_type

    def _arm(self):
        pygame.time.set_timer(self.event_type, TICK_INTERVAL_MS)

    def _disarm(self):
        # An interval of 0 removes the timer
        pygame.time.set_timer(self.event_type, 0)

    def handle_event(self, event):
        if event.type == self.event_type:
            self.fire()
            return True
        return False
