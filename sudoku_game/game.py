import pygame

from .generator import DIFFICULTIES
from .session import STATUS_AUTO_SOLVED, STATUS_PLAYING, STATUS_SOLVED, GameSession
from .stats import StatisticsStore
from .timer import PygameTicker

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 650

# Grid positioning
GRID_SIZE = 450
CELL_SIZE = GRID_SIZE // 9
GRID_X = 30
GRID_Y = 80

PANEL_X = GRID_X + GRID_SIZE + 20
PANEL_WIDTH = 260

# Color Palette
BG_COLOR = (245, 247, 250)
GRID_BG = (255, 255, 255)
BLACK = (30, 30, 30)
GRAY = (180, 190, 200)
PRIMARY = (79, 70, 229)
PRIMARY_LIGHT = (129, 140, 248)
PRIMARY_DARK = (55, 48, 163)
SUCCESS = (34, 197, 94)
ERROR = (239, 68, 68)
ERROR_LIGHT = (254, 202, 202)
WARNING = (251, 191, 36)
SELECTION = (224, 231, 255)
SELECTION_BORDER = (129, 140, 248)
RELATED = (238, 242, 255)
GIVEN_BG = (241, 245, 249)
TEXT_GRAY = (100, 116, 139)
SUBGRID_LINE = (203, 213, 225)
WHITE = (255, 255, 255)


def format_time(seconds):
    if seconds is None:
        return "--:--"
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


# =========================================================================
# PYGAME GUI
# Draws the session's cell views and turns clicks and keys into session calls.
# =========================================================================
class SudokuGame:
    def __init__(self, difficulty='easy', stats_file=None, rng=None, session=None):
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption("Sudoku")

        # Fonts
        self.font_title = pygame.font.Font(None, 48)
        self.font_large = pygame.font.Font(None, 42)
        self.font_medium = pygame.font.Font(None, 32)
        self.font_small = pygame.font.Font(None, 22)
        self.font_tiny = pygame.font.Font(None, 18)

        if session is None:
            self.ticker = PygameTicker()
            session = GameSession(
                difficulty=difficulty,
                stats=StatisticsStore(stats_file),
                ticker=self.ticker,
                rng=rng,
            )
        else:
            self.ticker = session.ticker
        self.session = session

        # Message overlay (title, body); None when hidden
        self.message = None

        # Key Mapping for Numpad support
        self.key_mapping = {
            pygame.K_1: 1, pygame.K_2: 2, pygame.K_3: 3, pygame.K_4: 4, pygame.K_5: 5,
            pygame.K_6: 6, pygame.K_7: 7, pygame.K_8: 8, pygame.K_9: 9,
            pygame.K_KP1: 1, pygame.K_KP2: 2, pygame.K_KP3: 3, pygame.K_KP4: 4, pygame.K_KP5: 5,
            pygame.K_KP6: 6, pygame.K_KP7: 7, pygame.K_KP8: 8, pygame.K_KP9: 9
        }
        self.arrow_keys = {
            pygame.K_UP: (-1, 0),
            pygame.K_DOWN: (1, 0),
            pygame.K_LEFT: (0, -1),
            pygame.K_RIGHT: (0, 1),
        }

        self.new_game()

    # --- Layout -----------------------------------------------------------

    def control_buttons(self):
        """(label, rect, action) for the panel buttons."""
        labels = [
            ("New Game", self.new_game),
            ("Check", self.check_solution),
            ("Hint", self.give_hint),
            ("Solve", self.solve_puzzle),
            ("Notes: " + ("On" if self.session.notes_mode else "Off"), self.session.toggle_notes_mode),
        ]
        buttons = []
        y = 290
        for text, action in labels:
            buttons.append((text, pygame.Rect(PANEL_X, y, PANEL_WIDTH, 40), action))
            y += 48
        return buttons

    def difficulty_buttons(self):
        width = (PANEL_WIDTH - 9) // 2
        top = 550
        buttons = []
        for i, diff in enumerate(DIFFICULTIES):
            bx = PANEL_X + (i % 2) * (width + 9)
            by = top + (i // 2) * 43
            buttons.append((diff, pygame.Rect(bx, by, width, 35)))
        return buttons

    def number_buttons(self):
        """Digits 1-9 plus the eraser (0) under the grid."""
        size = 42
        gap = (GRID_SIZE - 10 * size) // 9
        y = GRID_Y + GRID_SIZE + 20
        return [(n, pygame.Rect(GRID_X + i * (size + gap), y, size, size))
                for i, n in enumerate(list(range(1, 10)) + [0])]

    def modal_buttons(self):
        mx, my = (WINDOW_WIDTH - 400) // 2, (WINDOW_HEIGHT - 240) // 2
        return {
            'close': pygame.Rect(mx + 30, my + 170, 160, 45),
            'new_game': pygame.Rect(mx + 210, my + 170, 160, 45),
        }

    def cell_at(self, pos):
        x, y = pos
        if GRID_X <= x < GRID_X + GRID_SIZE and GRID_Y <= y < GRID_Y + GRID_SIZE:
            return (y - GRID_Y) // CELL_SIZE, (x - GRID_X) // CELL_SIZE
        return None

    # --- Actions ----------------------------------------------------------

    def new_game(self, difficulty=None):
        self.message = None
        self.draw_generating(difficulty or self.session.difficulty)
        self.session.new_game(difficulty)

    def check_solution(self):
        correct = self.session.check_solution()
        if correct is None:
            return
        if correct:
            self.show_message("Correct!", "Your solution is correct so far!")
        else:
            self.show_message("Incorrect", "There are errors in your solution.")

    def give_hint(self):
        was_active = self.session.active
        self.session.apply_hint()
        self.after_move(was_active)

    def solve_puzzle(self):
        self.session.solve_all()
        if self.session.status == STATUS_AUTO_SOLVED:
            self.show_message("Puzzle Solved", "The computer solved the puzzle for you.")

    def input_number(self, num):
        was_active = self.session.active
        if num == 0:
            self.session.erase_selected()
        else:
            self.session.input_number(num)
        self.after_move(was_active)

    def after_move(self, was_active):
        if was_active and self.session.status == STATUS_SOLVED:
            self.show_message("Congratulations!", "You solved the puzzle correctly!")

    def show_message(self, title, body):
        self.message = (title, body)

    # --- Input ------------------------------------------------------------

    def handle_click(self, pos):
        """Processes mouse clicks for grid selection and UI buttons."""
        if self.message is not None:
            buttons = self.modal_buttons()
            if buttons['close'].collidepoint(pos):
                self.message = None
            elif buttons['new_game'].collidepoint(pos):
                self.new_game()
            return

        cell = self.cell_at(pos)
        if cell is not None:
            self.session.select_cell(*cell)
            return

        for num, rect in self.number_buttons():
            if rect.collidepoint(pos):
                self.input_number(num)
                return

        for _, rect, action in self.control_buttons():
            if rect.collidepoint(pos):
                action()
                return

        for diff, rect in self.difficulty_buttons():
            if rect.collidepoint(pos):
                self.new_game(diff)
                return

    def handle_key(self, key):
        """Processes keyboard input for number entry and navigation."""
        if self.message is not None:
            if key in (pygame.K_ESCAPE, pygame.K_RETURN):
                self.message = None
            elif key == pygame.K_SPACE:
                self.new_game()
            return

        if not self.session.active:
            if key == pygame.K_SPACE:
                self.new_game()
            return

        num = self.key_mapping.get(key)
        if num is not None:
            self.input_number(num)
        elif key in (pygame.K_DELETE, pygame.K_BACKSPACE):
            self.input_number(0)
        elif key in self.arrow_keys:
            self.session.move_selection(*self.arrow_keys[key])
        elif key == pygame.K_n:
            self.session.toggle_notes_mode()

    def handle_event(self, event):
        """Returns False when the window should close."""
        if event.type == pygame.QUIT:
            return False
        if isinstance(self.ticker, PygameTicker) and self.ticker.handle_event(event):
            return True
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.handle_click(event.pos)
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event.key)
        return True

    # --- Drawing ----------------------------------------------------------

    def draw_rounded_rect(self, surface, color, rect, radius=10):
        pygame.draw.rect(surface, color, rect, border_radius=radius)

    def draw_button(self, text, rect, color, text_color):
        """Draws a clickable button with a shadow effect."""
        shadow = rect.move(2, 2)
        self.draw_rounded_rect(self.screen, (210, 214, 220), shadow, 8)
        self.draw_rounded_rect(self.screen, color, rect, 8)
        text_surface = self.font_small.render(text, True, text_color)
        self.screen.blit(text_surface, text_surface.get_rect(center=rect.center))

    def draw_stat_card(self, label, value, x, y, width):
        """Draws a statistic display card."""
        self.draw_rounded_rect(self.screen, GRID_BG, pygame.Rect(x, y, width, 50), 8)
        self.screen.blit(self.font_tiny.render(label, True, TEXT_GRAY), (x + 12, y + 10))
        self.screen.blit(self.font_medium.render(str(value), True, BLACK), (x + 12, y + 24))

    def draw_generating(self, difficulty):
        self.screen.fill(BG_COLOR)
        text = self.font_large.render(f"Generating {difficulty} puzzle...", True, PRIMARY)
        self.screen.blit(text, text.get_rect(center=(WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2)))
        pygame.display.flip()

    def draw_cells(self):
        """Cell backgrounds, digits and notes."""
        for view in self.session.cell_views():
            x = GRID_X + view.col * CELL_SIZE
            y = GRID_Y + view.row * CELL_SIZE
            rect = pygame.Rect(x, y, CELL_SIZE, CELL_SIZE)

            if view.selected:
                pygame.draw.rect(self.screen, SELECTION, rect)
            elif view.related:
                pygame.draw.rect(self.screen, RELATED, rect)
            elif view.given:
                pygame.draw.rect(self.screen, GIVEN_BG, rect)
            if view.error:
                pygame.draw.rect(self.screen, ERROR_LIGHT, rect.inflate(-4, -4))

            if view.value:
                if view.given:
                    color = BLACK
                else:
                    color = ERROR if view.error else PRIMARY
                text = self.font_large.render(str(view.value), True, color)
                self.screen.blit(text, text.get_rect(center=rect.center))
            elif view.notes:
                third = CELL_SIZE // 3
                for n in sorted(view.notes):
                    nx = x + ((n - 1) % 3) * third + third // 2
                    ny = y + ((n - 1) // 3) * third + third // 2
                    t = self.font_tiny.render(str(n), True, TEXT_GRAY)
                    self.screen.blit(t, t.get_rect(center=(nx, ny)))

            if view.selected:
                pygame.draw.rect(self.screen, SELECTION_BORDER, rect.inflate(-4, -4), 3)

    def draw_grid(self):
        """Draws the main Sudoku grid lines."""
        for i in range(10):
            thickness = 3 if i % 3 == 0 else 1
            color = BLACK if i % 3 == 0 else SUBGRID_LINE
            pygame.draw.line(self.screen, color,
                             (GRID_X, GRID_Y + i * CELL_SIZE),
                             (GRID_X + GRID_SIZE, GRID_Y + i * CELL_SIZE), thickness)
            pygame.draw.line(self.screen, color,
                             (GRID_X + i * CELL_SIZE, GRID_Y),
                             (GRID_X + i * CELL_SIZE, GRID_Y + GRID_SIZE), thickness)

    def draw_ui(self):
        """Draws the header, the right-hand control panel and the number pad."""
        session = self.session
        stats = session.stats

        title = self.font_title.render("Sudoku", True, PRIMARY_DARK)
        self.screen.blit(title, title.get_rect(midleft=(GRID_X, 40)))

        status_text = {
            STATUS_PLAYING: "Playing",
            STATUS_SOLVED: "Solved!",
            STATUS_AUTO_SOLVED: "Solved by AI",
        }.get(session.status, "Ready")
        header = f"{status_text}  |  Difficulty: {session.difficulty.capitalize()}"
        t = self.font_small.render(header, True, TEXT_GRAY)
        self.screen.blit(t, t.get_rect(midright=(WINDOW_WIDTH - 30, 40)))

        self.draw_stat_card("TIME", format_time(session.timer), PANEL_X, 80, 125)
        self.draw_stat_card("BEST", format_time(stats.best_time), PANEL_X + 135, 80, 125)
        self.draw_stat_card("PLAYED", stats.games_played, PANEL_X, 140, 80)
        self.draw_stat_card("WON", stats.games_won, PANEL_X + 90, 140, 80)
        self.draw_stat_card("HINTS", stats.hints_used, PANEL_X + 180, 140, 80)
        self.draw_stat_card("ERRORS", session.errors, PANEL_X, 200, 125)
        self.draw_stat_card("BLANKS", session.removed, PANEL_X + 135, 200, 125)

        colors = [PRIMARY, SUCCESS, WARNING, ERROR, PRIMARY_LIGHT if session.notes_mode else TEXT_GRAY]
        for (text, rect, _), color in zip(self.control_buttons(), colors):
            self.draw_button(text, rect, color, WHITE)

        for diff, rect in self.difficulty_buttons():
            active = diff == session.difficulty
            self.draw_rounded_rect(self.screen, PRIMARY if active else GRID_BG, rect, 6)
            t = self.font_tiny.render(diff.upper(), True, WHITE if active else TEXT_GRAY)
            self.screen.blit(t, t.get_rect(center=rect.center))

        for num, rect in self.number_buttons():
            active = num != 0 and num == session.selected_number
            self.draw_rounded_rect(self.screen, PRIMARY if active else GRID_BG, rect, 6)
            label = str(num) if num else "X"
            t = self.font_medium.render(label, True, WHITE if active else PRIMARY_DARK)
            self.screen.blit(t, t.get_rect(center=rect.center))

    def draw_message(self):
        overlay = pygame.Surface((WINDOW_WIDTH, WINDOW_HEIGHT))
        overlay.set_alpha(200)
        overlay.fill((20, 20, 30))
        self.screen.blit(overlay, (0, 0))

        title, body = self.message
        mx, my = (WINDOW_WIDTH - 400) // 2, (WINDOW_HEIGHT - 240) // 2
        self.draw_rounded_rect(self.screen, GRID_BG, pygame.Rect(mx, my, 400, 240), 16)
        t = self.font_title.render(title, True, PRIMARY_DARK)
        self.screen.blit(t, t.get_rect(center=(WINDOW_WIDTH // 2, my + 55)))
        b = self.font_small.render(body, True, TEXT_GRAY)
        self.screen.blit(b, b.get_rect(center=(WINDOW_WIDTH // 2, my + 115)))

        buttons = self.modal_buttons()
        self.draw_button("Close", buttons['close'], TEXT_GRAY, WHITE)
        self.draw_button("New Game", buttons['new_game'], PRIMARY, WHITE)

    def draw(self):
        self.screen.fill(BG_COLOR)
        pygame.draw.rect(self.screen, GRID_BG, pygame.Rect(GRID_X, GRID_Y, GRID_SIZE, GRID_SIZE))
        self.draw_cells()
        self.draw_grid()
        self.draw_ui()
        if self.message is not None:
            self.draw_message()

    def run(self):
        """Main game loop."""
        clock = pygame.time.Clock()
        running = True

        while running:
            for event in pygame.event.get():
                if not self.handle_event(event):
                    running = False
                    break

            self.draw()
            pygame.display.flip()
            clock.tick(60)

        self.ticker.cancel()
        pygame.quit()
