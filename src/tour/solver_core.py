"""Backtracking knight's tour search with one-step look-ahead pruning."""

from typing import List, Optional

from .model import (
    KNIGHT_MOVES,
    Board,
    MoveTable,
    Position,
    SearchConfig,
    SearchResult,
    is_available,
    is_blocked,
    reset,
)
from src.utils.trace import Tracer, get_tracer

# Boards at or above this many cells use the explicit stack under "auto".
RECURSION_CELL_LIMIT = 400

_REJECTED = 0
_PLACED = 1
_COMPLETE = 2


class _SearchState:
    """Mutable bookkeeping shared by every step of one search."""

    def __init__(self, board: Board, moves: MoveTable, prune: bool, tracer: Tracer):
        self.board = board
        self.moves = moves
        self.prune = prune
        self.tracer = tracer
        self.total = board.total_cells
        self.iterations = 0
        self.watermark = 0
        self.progress: List[int] = []

    def report_progress(self, fraction: float) -> None:
        percent = int(fraction * 100)
        if percent > self.watermark:
            self.watermark = percent
            self.progress.append(percent)
            self.tracer.log_progress(percent, self.iterations)


def solve(config: SearchConfig, tracer: Optional[Tracer] = None) -> SearchResult:
    """Allocate a board for `config` and search it."""
    board = config.new_board()
    return find_path(
        board,
        config.moves,
        config.start,
        prune=config.prune,
        strategy=config.strategy,
        tracer=tracer,
    )


def find_path(
    board: Board,
    moves: MoveTable = KNIGHT_MOVES,
    start: Position = (0, 0),
    prune: bool = True,
    strategy: str = "auto",
    tracer: Optional[Tracer] = None,
) -> SearchResult:
    """
    Reset `board` and search for a path visiting every cell once, starting at `start`.
    On success the board holds move numbers 1..width*height; on failure it is all zero.
    The iteration count is the number of search steps attempted.
    """
    tracer = tracer or get_tracer()
    if strategy == "auto":
        strategy = "recursive" if board.total_cells < RECURSION_CELL_LIMIT else "iterative"

    reset(board)
    state = _SearchState(board, moves, prune, tracer)
    if strategy == "recursive":
        found = _advance(state, tuple(start), 0, 0.0, 1.0)
    elif strategy == "iterative":
        found = _advance_iterative(state, tuple(start))
    else:
        raise ValueError(f"Unknown strategy {strategy!r}")

    return SearchResult(
        found=found,
        iterations=state.iterations,
        board=board,
        progress=state.progress,
    )


def _enter(state: _SearchState, pos: Position, moves_so_far: int, fraction: float) -> int:
    """Try to occupy `pos` as cell number moves_so_far + 1."""
    state.iterations += 1
    state.tracer.log_attempt(pos, state.iterations, moves_so_far + 1)
    state.report_progress(fraction)

    if moves_so_far >= state.total:
        state.tracer.log_tour_found(moves_so_far, state.iterations)
        return _COMPLETE

    if not is_available(state.board, pos):
        return _REJECTED

    placed = moves_so_far + 1
    state.board[pos] = placed
    state.tracer.log_place(pos, placed)

    # The last two cells cannot strand each other, so skip the look-ahead there.
    if state.prune and placed < state.total - 1:
        orphan = _find_orphan(state.board, state.moves, pos)
        if orphan is not None:
            state.board[pos] = 0
            state.tracer.log_prune(pos, placed, orphan)
            return _REJECTED

    return _PLACED


def _withdraw(state: _SearchState, pos: Position, placed: int) -> None:
    state.board[pos] = 0
    state.tracer.log_backtrack(pos, placed)


def _find_orphan(board: Board, moves: MoveTable, pos: Position) -> Optional[Position]:
    """Return an open neighbour of `pos` that no move can leave, if any."""
    x, y = pos
    for dx, dy in moves:
        neighbor = (x + dx, y + dy)
        if is_available(board, neighbor) and is_blocked(board, moves, neighbor):
            return neighbor
    return None


def _advance(
    state: _SearchState, pos: Position, moves_so_far: int, base: float, scale: float
) -> bool:
    outcome = _enter(state, pos, moves_so_far, base)
    if outcome != _PLACED:
        return outcome == _COMPLETE

    placed = moves_so_far + 1
    x, y = pos
    child_scale = scale / len(state.moves)
    for index, (dx, dy) in enumerate(state.moves):
        if _advance(state, (x + dx, y + dy), placed, base + index * child_scale, child_scale):
            return True

    _withdraw(state, pos, placed)
    return False


def _advance_iterative(state: _SearchState, start: Position) -> bool:
    """Same search as `_advance`, driven by an explicit stack of frames."""
    outcome = _enter(state, start, 0, 0.0)
    if outcome == _COMPLETE:
        return True
    if outcome == _REJECTED:
        return False

    width = len(state.moves)
    # Each frame: [position, next move index, progress base, progress scale].
    stack: List[list] = [[start, 0, 0.0, 1.0]]
    while stack:
        frame = stack[-1]
        pos, index, base, scale = frame
        if index >= width:
            stack.pop()
            _withdraw(state, pos, len(stack) + 1)
            continue

        frame[1] = index + 1
        dx, dy = state.moves[index]
        child = (pos[0] + dx, pos[1] + dy)
        child_scale = scale / width
        child_base = base + index * child_scale
        outcome = _enter(state, child, len(stack), child_base)
        if outcome == _COMPLETE:
            return True
        if outcome == _PLACED:
            stack.append([child, 0, child_base, child_scale])

    return False
