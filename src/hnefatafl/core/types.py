"""Position value type and coordinate helpers.

Board layout (row-major, row 0 at the top)::

    (0, 0)  = a1 ... (0, 10)  = k1
    ...
    (10, 0) = a11 ... (10, 10) = k11

The throne sits at (5, 5); the four corners are the escape squares.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

BOARD_SIZE: Final = 11
CELL_COUNT: Final = BOARD_SIZE * BOARD_SIZE

_FILES: Final = "abcdefghijk"


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable (row, col) coordinate, 0-indexed."""

    row: int
    col: int

    @property
    def is_on_board(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    @property
    def index(self) -> int:
        """Flat cell index 0–120 (only meaningful when on the board)."""
        return self.row * BOARD_SIZE + self.col

    def offset(self, d_row: int, d_col: int) -> Position:
        return Position(self.row + d_row, self.col + d_col)

    def distance(self, other: Position) -> int:
        """Manhattan distance to *other*."""
        return abs(self.row - other.row) + abs(self.col - other.col)

    def __str__(self) -> str:
        if not self.is_on_board:
            return f"({self.row},{self.col})"
        return position_name(self)


ORTHOGONAL_DIRS: Final[tuple[tuple[int, int], ...]] = (
    (0, 1),
    (0, -1),
    (1, 0),
    (-1, 0),
)

THRONE: Final = Position(5, 5)
CORNERS: Final[tuple[Position, ...]] = (
    Position(0, 0),
    Position(0, BOARD_SIZE - 1),
    Position(BOARD_SIZE - 1, 0),
    Position(BOARD_SIZE - 1, BOARD_SIZE - 1),
)
_CORNER_SET: Final = frozenset(CORNERS)


def position_at(index: int) -> Position:
    """Inverse of :attr:`Position.index`."""
    return Position(index // BOARD_SIZE, index % BOARD_SIZE)


def is_throne(pos: Position) -> bool:
    return pos == THRONE


def is_corner(pos: Position) -> bool:
    return pos in _CORNER_SET


def is_special_square(pos: Position) -> bool:
    """Throne or corner: king-only, hostile for captures."""
    return pos == THRONE or pos in _CORNER_SET


def position_name(pos: Position) -> str:
    """Human-readable name, e.g. (0, 0) → 'a1', (5, 5) → 'f6'."""
    return f"{_FILES[pos.col]}{pos.row + 1}"


def parse_position(name: str) -> Position:
    """Parse a position name, e.g. 'f6' → Position(5, 5)."""
    text = name.strip().lower()
    if len(text) < 2 or text[0] not in _FILES or not text[1:].isdigit():
        raise ValueError(f"Invalid position name: {name!r}")
    row = int(text[1:]) - 1
    pos = Position(row, _FILES.index(text[0]))
    if not pos.is_on_board:
        raise ValueError(f"Invalid position name: {name!r}")
    return pos


ALL_POSITIONS: Final[tuple[Position, ...]] = tuple(
    position_at(idx) for idx in range(CELL_COUNT)
)
