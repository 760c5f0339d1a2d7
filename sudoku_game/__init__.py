"""Sudoku puzzle generation with uniqueness checking, a game session and a pygame frontend."""

from .board import is_valid_placement
from .generator import (
    DIFFICULTY_SETTINGS,
    GenerationError,
    Puzzle,
    PuzzleGenerator,
    count_solutions,
    has_unique_solution,
)
from .session import CellView, GameSession
from .stats import StatisticsStore

__all__ = [
    "CellView",
    "DIFFICULTY_SETTINGS",
    "GameSession",
    "GenerationError",
    "Puzzle",
    "PuzzleGenerator",
    "StatisticsStore",
    "count_solutions",
    "has_unique_solution",
    "is_valid_placement",
]
