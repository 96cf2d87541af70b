"""Board, move table, and search configuration data structures."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

Position = Tuple[int, int]
Offset = Tuple[int, int]

# Order matters: it decides which tour (if any) is found first.
KNIGHT_OFFSETS: Tuple[Offset, ...] = (
    (1, 2),
    (2, 1),
    (-1, 2),
    (-2, 1),
    (1, -2),
    (2, -1),
    (-1, -2),
    (-2, -1),
)

STRATEGIES = ("auto", "recursive", "iterative")


@dataclass(frozen=True)
class MoveTable:
    """
    Ordered, non-empty sequence of relative (dx, dy) moves.
    The table is immutable for the lifetime of a search.
    """

    offsets: Tuple[Offset, ...] = KNIGHT_OFFSETS

    def __post_init__(self) -> None:
        normalized = []
        for offset in self.offsets:
            try:
                dx, dy = offset
                normalized.append((int(dx), int(dy)))
            except (TypeError, ValueError):
                raise ValueError(f"Move offsets must be (dx, dy) pairs, got {offset!r}") from None
        if not normalized:
            raise ValueError("Move table must contain at least one move")
        object.__setattr__(self, "offsets", tuple(normalized))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[int]]) -> "MoveTable":
        return cls(offsets=tuple(tuple(p) for p in pairs))

    def reversed(self) -> "MoveTable":
        return MoveTable(offsets=tuple(reversed(self.offsets)))

    def __iter__(self) -> Iterator[Offset]:
        return iter(self.offsets)

    def __len__(self) -> int:
        return len(self.offsets)

    def __getitem__(self, index: int) -> Offset:
        return self.offsets[index]


KNIGHT_MOVES = MoveTable()


class Board:
    """
    Fixed-size grid of move-order markers stored row-major in a flat list.
    A cell holds 0 while unvisited and k > 0 once visited on move k.
    """

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Board dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[int] = [0] * (width * height)

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def __getitem__(self, pos: Position) -> int:
        x, y = pos
        return self.cells[y * self.width + x]

    def __setitem__(self, pos: Position, value: int) -> None:
        x, y = pos
        self.cells[y * self.width + x] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.width, self.height, self.cells) == (other.width, other.height, other.cells)

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, filled={self.filled()})"

    def reset(self) -> None:
        for i in range(len(self.cells)):
            self.cells[i] = 0

    def copy(self) -> "Board":
        clone = Board(self.width, self.height)
        clone.cells = list(self.cells)
        return clone

    def filled(self) -> int:
        return sum(1 for value in self.cells if value)

    def is_empty(self) -> bool:
        return not any(self.cells)

    def rows(self) -> List[List[int]]:
        return [self.cells[y * self.width:(y + 1) * self.width] for y in range(self.height)]

    def path(self) -> List[Position]:
        """Visited positions ordered by move number."""
        visited = [
            (value, (i % self.width, i // self.width))
            for i, value in enumerate(self.cells)
            if value
        ]
        return [pos for _, pos in sorted(visited)]

    def format(self, field_width: int = 5) -> str:
        return "\n".join(
            "".join(f"{value:{field_width}d}" for value in row) for row in self.rows()
        )


def reset(board: Board) -> None:
    """Clear every cell back to unvisited."""
    board.reset()


def is_available(board: Board, pos: Position) -> bool:
    x, y = pos
    if x < 0 or x >= board.width or y < 0 or y >= board.height:
        return False
    return board.cells[y * board.width + x] == 0


def is_blocked(board: Board, moves: MoveTable, pos: Position) -> bool:
    """True when no move from `pos` lands on an available cell."""
    x, y = pos
    for dx, dy in moves:
        if is_available(board, (x + dx, y + dy)):
            return False
    return True


@dataclass
class SearchConfig:
    width: int = 10
    height: int = 10
    moves: MoveTable = KNIGHT_MOVES
    start: Position = (0, 0)
    prune: bool = True
    strategy: str = "auto"

    def __post_init__(self) -> None:
        if not isinstance(self.moves, MoveTable):
            self.moves = MoveTable.from_pairs(self.moves)
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy {self.strategy!r}; expected one of {STRATEGIES}")
        x, y = self.start
        self.start = (int(x), int(y))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchConfig":
        """Build a config from a loosely-typed record (CLI job files, JSON)."""
        kwargs: Dict[str, Any] = {}
        for key in ("width", "height"):
            if data.get(key) is not None:
                kwargs[key] = int(data[key])
        if data.get("start") is not None:
            kwargs["start"] = tuple(data["start"])
        elif data.get("start_x") is not None or data.get("start_y") is not None:
            kwargs["start"] = (int(data.get("start_x") or 0), int(data.get("start_y") or 0))
        if data.get("prune") is not None:
            kwargs["prune"] = _as_bool(data["prune"])
        if data.get("strategy"):
            kwargs["strategy"] = str(data["strategy"])
        if data.get("moves") is not None:
            kwargs["moves"] = MoveTable.from_pairs(data["moves"])
        return cls(**kwargs)

    def new_board(self) -> Board:
        return Board(self.width, self.height)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("0", "false", "no", "off", "")
    return bool(value)


@dataclass
class SearchResult:
    found: bool
    iterations: int
    board: Board
    progress: List[int] = field(default_factory=list)

    def path(self) -> List[Position]:
        return self.board.path() if self.found else []

    def as_tuple(self) -> Tuple[bool, int]:
        return self.found, self.iterations


def validate_tour(board: Board, moves: Optional[MoveTable] = None) -> bool:
    """Check that the board holds 1..N exactly once with legal consecutive steps."""
    moves = moves or KNIGHT_MOVES
    if sorted(board.cells) != list(range(1, board.total_cells + 1)):
        return False
    path = board.path()
    legal = set(moves.offsets)
    for (x0, y0), (x1, y1) in zip(path, path[1:]):
        if (x1 - x0, y1 - y0) not in legal:
            return False
    return True
