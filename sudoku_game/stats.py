import json
import logging
import os

log = logging.getLogger(__name__)

DEFAULT_STATS_FILE = os.path.join(os.path.expanduser("~"), ".sudoku_stats.json")


def is_count(value):
    # bool is an int subclass, but JSON true/false is not a count
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


# =========================================================================
# LOCAL STATISTICS STORAGE
# Saves play counters to a JSON file after every change.
# =========================================================================
class StatisticsStore:
    FIELDS = ('games_played', 'games_won', 'hints_used', 'best_time')

    def __init__(self, filename=DEFAULT_STATS_FILE):
        self.filename = filename
        self.games_played = 0
        self.games_won = 0
        self.hints_used = 0
        self.best_time = None
        if filename is not None:
            self.load()

    def load(self):
        try:
            with open(self.filename, 'r') as f:
                data = json.load(f)
        except FileNotFoundError:
            return
        except (json.JSONDecodeError, UnicodeDecodeError):
            log.warning("Ignoring unreadable statistics file %s", self.filename)
            return

        if not isinstance(data, dict):
            log.warning("Ignoring malformed statistics file %s", self.filename)
            return

        for name in ('games_played', 'games_won', 'hints_used'):
            value = data.get(name)
            if is_count(value):
                setattr(self, name, value)
        best = data.get('best_time')
        if is_count(best):
            self.best_time = best

    def save(self):
        if self.filename is None:
            return
        try:
            with open(self.filename, 'w') as f:
                json.dump(self.as_dict(), f, indent=2)
        except OSError as e:
            log.warning("Could not save statistics to %s: %s", self.filename, e)

    def as_dict(self):
        return {name: getattr(self, name) for name in self.FIELDS}

    def record_game_started(self):
        self.games_played += 1
        self.save()

    def record_hint(self):
        self.hints_used += 1
        self.save()

    def record_win(self, seconds):
        """Counts a win and keeps the fastest time."""
        self.games_won += 1
        if self.best_time is None or seconds < self.best_time:
            self.best_time = seconds
        self.save()
