import logging
import random
from collections import namedtuple

from .board import SIZE, boards_equal, copy_board, find_empty, is_related, make_empty_board
from .generator import PuzzleGenerator, check_difficulty
from .stats import StatisticsStore
from .timer import ManualTicker

log = logging.getLogger(__name__)

CellView = namedtuple('CellView', ['row', 'col', 'value', 'given', 'error', 'selected', 'related', 'notes'])

STATUS_IDLE = 'idle'
STATUS_PLAYING = 'playing'
STATUS_SOLVED = 'solved'
STATUS_AUTO_SOLVED = 'auto-solved'


# =========================================================================
# GAME SESSION
# Holds one puzzle and the player's progress on it. Moves that the rules
# do not allow (editing a given, acting on a finished game) are ignored.
# =========================================================================
class GameSession:
    def __init__(self, difficulty='easy', stats=None, ticker=None, rng=None):
        self.difficulty = check_difficulty(difficulty)
        self.stats = stats if stats is not None else StatisticsStore(filename=None)
        self.ticker = ticker if ticker is not None else ManualTicker()
        self.rng = rng if rng is not None else random.Random()

        self.board = make_empty_board()
        self.solution = make_empty_board()
        self.initial = make_empty_board()
        self.removed = 0

        self.selected = None
        self.selected_number = None
        self.notes_mode = False
        self.notes = {}
        self.active = False
        self.errors = 0
        self.timer = 0
        self.status = STATUS_IDLE

    def new_game(self, difficulty=None):
        """Generates a fresh puzzle and resets the player's progress."""
        if difficulty is not None:
            self.difficulty = check_difficulty(difficulty)

        # Stop any existing timer before the new game starts its own
        self.ticker.cancel()
        puzzle = PuzzleGenerator(self.difficulty, rng=self.rng).generate()
        self.start(puzzle)
        return puzzle

    def start(self, puzzle):
        """Begins play on an already generated puzzle."""
        self.ticker.cancel()
        self.timer = 0
        self.selected = None
        self.selected_number = None
        self.errors = 0
        self.notes = {}

        self.difficulty = puzzle.difficulty
        self.solution = copy_board(puzzle.solution)
        self.board = copy_board(puzzle.board)
        self.initial = copy_board(puzzle.initial)
        self.removed = puzzle.removed

        self.ticker.start(self.tick)
        self.active = True
        self.status = STATUS_PLAYING
        self.stats.record_game_started()

    def tick(self):
        if self.active:
            self.timer += 1

    def is_given(self, row, col):
        return self.initial[row][col] != 0

    def select_cell(self, row, col):
        """Toggles the selection; given cells cannot be selected."""
        if not self.active:
            return
        if self.selected == (row, col):
            self.selected = None
        elif self.is_given(row, col):
            self.selected = None
        else:
            self.selected = (row, col)

    def move_selection(self, d_row, d_col):
        if not self.active or self.selected is None:
            return
        row, col = self.selected
        new_row = max(0, min(SIZE - 1, row + d_row))
        new_col = max(0, min(SIZE - 1, col + d_col))
        if (new_row, new_col) != (row, col):
            self.select_cell(new_row, new_col)

    def toggle_notes_mode(self):
        self.notes_mode = not self.notes_mode
        return self.notes_mode

    def set_cell(self, row, col, num):
        """
        Places 'num' at (row, col), or clears the cell if it already holds
        'num'. In notes mode the digit is toggled in the cell's notes
        instead. Returns True when the move completes the puzzle.
        """
        if not self.active or self.is_given(row, col):
            return False

        self.selected_number = num
        if self.notes_mode:
            self._toggle_note(row, col, num)
            return False

        if self.board[row][col] == num:
            self.board[row][col] = 0
        else:
            self.board[row][col] = num
            self.notes.pop((row, col), None)
        return self.check_complete()

    def _toggle_note(self, row, col, num):
        cell_notes = self.notes.setdefault((row, col), set())
        if num in cell_notes:
            cell_notes.discard(num)
            if not cell_notes:
                del self.notes[(row, col)]
        else:
            cell_notes.add(num)

    def input_number(self, num):
        if self.selected is None:
            return False
        row, col = self.selected
        return self.set_cell(row, col, num)

    def erase_cell(self, row, col):
        if not self.active or self.is_given(row, col):
            return
        self.board[row][col] = 0
        self.notes.pop((row, col), None)

    def erase_selected(self):
        if self.selected is not None:
            self.erase_cell(*self.selected)

    def apply_hint(self):
        """Reveals the correct digit of one random empty cell."""
        if not self.active:
            return None

        empty_cells = [(i, j) for i in range(SIZE) for j in range(SIZE) if self.board[i][j] == 0]
        if not empty_cells:
            return None

        row, col = self.rng.choice(empty_cells)
        self.board[row][col] = self.solution[row][col]
        self.notes.pop((row, col), None)
        self.stats.record_hint()

        self.check_complete()
        return row, col

    def solve_all(self):
        """Copies the solution onto the board and ends the game."""
        if not self.active:
            return
        self.board = copy_board(self.solution)
        self.notes = {}
        self._finish(STATUS_AUTO_SOLVED)

    def is_board_correct(self):
        return boards_equal(self.board, self.solution)

    def check_solution(self):
        """Compares the board against the solution; a mismatch counts as an error."""
        if not self.active:
            return None
        correct = self.is_board_correct()
        if not correct:
            self.errors += 1
        return correct

    def check_complete(self):
        """Ends the game as a win when the board is full and correct."""
        if not self.active:
            return False
        if find_empty(self.board) is not None:
            return False
        if not self.is_board_correct():
            return False

        self._finish(STATUS_SOLVED)
        self.stats.record_win(self.timer)
        log.info("Puzzle solved in %d seconds", self.timer)
        return True

    def _finish(self, status):
        self.active = False
        self.status = status
        self.ticker.cancel()

    def cell_views(self):
        """Per-cell display state for the presentation layer, in row-major order."""
        views = []
        for i in range(SIZE):
            for j in range(SIZE):
                value = self.board[i][j]
                selected = self.selected == (i, j)
                related = self.selected is not None and is_related(i, j, *self.selected)
                views.append(CellView(
                    row=i,
                    col=j,
                    value=value,
                    given=self.is_given(i, j),
                    error=value != 0 and value != self.solution[i][j],
                    selected=selected,
                    related=related,
                    notes=frozenset(self.notes.get((i, j), ())),
                ))
        return views
