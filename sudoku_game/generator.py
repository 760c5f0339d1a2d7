import logging
import random
from collections import namedtuple

from .board import (
    BOX,
    DIGITS,
    SIZE,
    copy_board,
    find_empty,
    has_conflicts,
    is_valid_placement,
    make_empty_board,
)

log = logging.getLogger(__name__)

# Number of cells carved out of the solved grid for each difficulty tier.
DIFFICULTY_SETTINGS = {
    'easy': 40,
    'medium': 50,
    'hard': 55,
    'expert': 60,
}
DIFFICULTIES = tuple(DIFFICULTY_SETTINGS)

# Consecutive failed removals before carving gives up on reaching the target.
MAX_ATTEMPTS = 200

MAX_DEPTH = SIZE * SIZE

Puzzle = namedtuple('Puzzle', ['board', 'initial', 'solution', 'removed', 'target', 'difficulty'])


class GenerationError(RuntimeError):
    """Raised when backtracking fails to complete a grid."""


def check_difficulty(difficulty):
    if difficulty not in DIFFICULTY_SETTINGS:
        raise ValueError(
            f"Unknown difficulty {difficulty!r}; expected one of {', '.join(DIFFICULTIES)}")
    return difficulty


# =========================================================================
# BACKTRACKING SOLVER
# A standard DFS solver used for validation and solution counting.
# =========================================================================
class BacktrackingSolver:
    def __init__(self, board):
        self.board = copy_board(board)
        self.solution_count = 0
        self.first_solution = None

    def solve(self):
        """Fills self.board with the first completion found. Returns False if none exists."""
        # Givens that already clash can never be completed
        if has_conflicts(self.board):
            return False
        return self._solve(0)

    def _solve(self, depth):
        assert depth <= MAX_DEPTH, "backtracking recursed past the number of cells"
        cell = find_empty(self.board)
        if cell is None:
            return True

        i, j = cell
        for num in DIGITS:
            if is_valid_placement(self.board, i, j, num):
                self.board[i][j] = num
                if self._solve(depth + 1):
                    return True
                self.board[i][j] = 0
        return False

    def count_solutions(self, max_solutions=2):
        """
        Counts completions of the board, stopping as soon as max_solutions
        have been found. The result is therefore capped at max_solutions:
        1 means the puzzle is unique, 0 unsolvable, max_solutions ambiguous.
        """
        if max_solutions < 1:
            raise ValueError("max_solutions must be at least 1")
        self.solution_count = 0
        self.first_solution = None
        if has_conflicts(self.board):
            return 0
        self._count(max_solutions, 0)
        return min(self.solution_count, max_solutions)

    def _count(self, max_solutions, depth):
        assert depth <= MAX_DEPTH, "backtracking recursed past the number of cells"
        cell = find_empty(self.board)
        if cell is None:
            self.solution_count += 1
            if self.first_solution is None:
                self.first_solution = copy_board(self.board)
            return

        i, j = cell
        for num in DIGITS:
            if is_valid_placement(self.board, i, j, num):
                self.board[i][j] = num
                self._count(max_solutions, depth + 1)
                self.board[i][j] = 0

                # Enough solutions seen, no need to try the remaining digits
                if self.solution_count >= max_solutions:
                    return


def count_solutions(board, max_solutions=2):
    """Solution count of 'board', capped at max_solutions. The board is not modified."""
    return BacktrackingSolver(board).count_solutions(max_solutions)


def has_unique_solution(board):
    return count_solutions(board, 2) == 1


def solve(board):
    """Returns a solved copy of 'board', or None if it has no solution."""
    solver = BacktrackingSolver(board)
    if solver.solve():
        return solver.board
    return None


# =========================================================================
# PUZZLE GENERATOR
# Generates a full valid board, then removes numbers to create a puzzle.
# =========================================================================
class PuzzleGenerator:
    def __init__(self, difficulty='easy', rng=None):
        self.difficulty = check_difficulty(difficulty)
        self.rng = rng if rng is not None else random.Random()

    @property
    def target(self):
        return DIFFICULTY_SETTINGS[self.difficulty]

    def generate_complete_board(self):
        """Generates a completely filled, valid Sudoku grid."""
        board = make_empty_board()

        # Diagonal boxes share no row, column or box, so they need no checks
        for k in range(0, SIZE, BOX):
            self.fill_box(board, k, k)

        if not self.fill_board(board):
            raise GenerationError("Backtracking could not complete the seeded grid")
        return board

    def fill_box(self, board, row, col):
        numbers = list(DIGITS)
        self.rng.shuffle(numbers)
        for i in range(BOX):
            for j in range(BOX):
                board[row + i][col + j] = numbers.pop()

    def fill_board(self, board, depth=0):
        """Recursively fills the empty cells with random numbers."""
        assert depth <= MAX_DEPTH, "backtracking recursed past the number of cells"
        cell = find_empty(board)
        if cell is None:
            return True

        i, j = cell
        numbers = list(DIGITS)
        self.rng.shuffle(numbers)

        for num in numbers:
            if is_valid_placement(board, i, j, num):
                board[i][j] = num
                if self.fill_board(board, depth + 1):
                    return True
                board[i][j] = 0

        return False

    def create_puzzle(self, solution, target=None):
        """
        Removes numbers from a complete board while the puzzle keeps a
        unique solution. Gives up after MAX_ATTEMPTS failures in a row,
        so fewer than 'target' cells may end up removed.

        Returns (board, initial, removed).
        """
        if target is None:
            target = self.target
        board = copy_board(solution)
        initial = copy_board(solution)

        removed = 0
        attempts = 0

        while removed < target and attempts < MAX_ATTEMPTS:
            row = self.rng.randrange(SIZE)
            col = self.rng.randrange(SIZE)

            if board[row][col] == 0:
                attempts += 1
                continue

            backup = board[row][col]
            board[row][col] = 0
            initial[row][col] = 0

            if count_solutions(board, 2) == 1:
                removed += 1
                attempts = 0
            else:
                # Removal broke uniqueness, put the number back
                board[row][col] = backup
                initial[row][col] = backup
                attempts += 1

        log.info("Created puzzle with %d cells removed (target: %d)", removed, target)
        return board, initial, removed

    def generate(self):
        """Main entry point to generate a puzzle and its solution."""
        log.debug("Generating %s puzzle", self.difficulty)
        solution = self.generate_complete_board()
        board, initial, removed = self.create_puzzle(solution)
        return Puzzle(board, initial, solution, removed, self.target, self.difficulty)
