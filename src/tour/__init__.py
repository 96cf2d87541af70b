"""Board model, move tables, and backtracking search for knight's tours."""

from .model import (
    KNIGHT_MOVES,
    Board,
    MoveTable,
    SearchConfig,
    SearchResult,
    is_available,
    is_blocked,
    reset,
    validate_tour,
)
from .solver_core import find_path, solve
from .loader import load_jobs

__all__ = [
    "KNIGHT_MOVES",
    "Board",
    "MoveTable",
    "SearchConfig",
    "SearchResult",
    "is_available",
    "is_blocked",
    "reset",
    "validate_tour",
    "find_path",
    "solve",
    "load_jobs",
]
