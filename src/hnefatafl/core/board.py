"""Board - piece placement on the 11x11 Hnefatafl grid."""

from __future__ import annotations

from hnefatafl.core.enums import PieceType, Role
from hnefatafl.core.errors import InvalidBoard
from hnefatafl.core.piece import piece_char
from hnefatafl.core.types import (
    BOARD_SIZE,
    CELL_COUNT,
    Position,
    is_special_square,
    position_at,
)
from hnefatafl.core.zobrist import piece_key

_PIECE_TYPE_COUNT = len(PieceType)

_INITIAL_ATTACKERS: tuple[tuple[int, int], ...] = (
    # Top and bottom edges
    *((0, c) for c in range(3, 8)),
    *((10, c) for c in range(3, 8)),
    # Left and right edges
    *((r, 0) for r in range(3, 8)),
    *((r, 10) for r in range(3, 8)),
    # One step in from each edge
    (1, 5),
    (9, 5),
    (5, 1),
    (5, 9),
)

_INITIAL_DEFENDERS: tuple[tuple[int, int], ...] = (
    (3, 5),
    (4, 4),
    (4, 5),
    (4, 6),
    (5, 3),
    (5, 4),
    (5, 6),
    (5, 7),
    (6, 4),
    (6, 5),
    (6, 6),
    (7, 5),
)


class Board:
    """Mutable 121-cell board with incremental piece indexes and hash."""

    __slots__ = ("_cells", "_piece_bitboards", "_king_index", "_hash")

    def __init__(self) -> None:
        self._cells: list[PieceType | None] = [None] * CELL_COUNT
        # [piece_type-1] -> bitboard of occupied cells.
        self._piece_bitboards: list[int] = [0] * _PIECE_TYPE_COUNT
        # King cell cache (None once the king is gone).
        self._king_index: int | None = None
        self._hash = 0

    @staticmethod
    def _positions_from_bitboard(bitboard: int) -> list[Position]:
        positions: list[Position] = []
        while bitboard:
            lsb = bitboard & -bitboard
            positions.append(position_at(lsb.bit_length() - 1))
            bitboard ^= lsb
        return positions

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> PieceType | None:
        if not pos.is_on_board:
            raise IndexError(f"Position off the board: {pos}")
        return self._cells[pos.index]

    def __setitem__(self, pos: Position, piece: PieceType | None) -> None:
        if not pos.is_on_board:
            raise IndexError(f"Position off the board: {pos}")
        idx = pos.index
        old_piece = self._cells[idx]
        if old_piece == piece:
            return

        mask = 1 << idx

        if old_piece is not None:
            self._piece_bitboards[int(old_piece) - 1] &= ~mask
            self._hash ^= piece_key(old_piece, idx)
            if old_piece == PieceType.KING and self._king_index == idx:
                self._king_index = None

        self._cells[idx] = piece

        if piece is None:
            return

        self._piece_bitboards[int(piece) - 1] |= mask
        self._hash ^= piece_key(piece, idx)
        if piece == PieceType.KING:
            self._king_index = idx

    def get(self, pos: Position) -> PieceType | None:
        """Piece at *pos*, or ``None`` when empty or off the board."""
        if not pos.is_on_board:
            return None
        return self._cells[pos.index]

    def is_empty(self, pos: Position) -> bool:
        return self._cells[pos.index] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, piece_type: PieceType) -> list[Position]:
        """Cells occupied by *piece_type*."""
        return self._positions_from_bitboard(self._piece_bitboards[int(piece_type) - 1])

    def count(self, piece_type: PieceType) -> int:
        return self._piece_bitboards[int(piece_type) - 1].bit_count()

    def role_bitboard(self, role: Role) -> int:
        """Bitboard of all cells whose piece is moved by *role*."""
        if role == Role.ATTACKER:
            return self._piece_bitboards[int(PieceType.ATTACKER) - 1]
        return (
            self._piece_bitboards[int(PieceType.DEFENDER) - 1]
            | self._piece_bitboards[int(PieceType.KING) - 1]
        )

    def role_pieces(self, role: Role) -> list[Position]:
        """All cells whose piece is moved by *role*."""
        return self._positions_from_bitboard(self.role_bitboard(role))

    @property
    def king_position(self) -> Position | None:
        """Where the king stands, or ``None`` once captured."""
        if self._king_index is None:
            return None
        return position_at(self._king_index)

    @property
    def zobrist_hash(self) -> int:
        """Hash of the piece placement (side to move not included)."""
        return self._hash

    def key(self) -> str:
        """Canonical text key: one code per cell, '.' for empty."""
        return "".join("." if p is None else piece_char(p) for p in self._cells)

    def validate(self) -> None:
        """Raise :class:`InvalidBoard` when a placement invariant is broken."""
        kings = self.count(PieceType.KING)
        if kings > 1:
            raise InvalidBoard(f"Board has {kings} kings")
        for piece_type in (PieceType.ATTACKER, PieceType.DEFENDER):
            for pos in self.pieces(piece_type):
                if is_special_square(pos):
                    raise InvalidBoard(f"{piece_type} may not stand on {pos}")

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._cells = self._cells.copy()
        b._piece_bitboards = self._piece_bitboards.copy()
        b._king_index = self._king_index
        b._hash = self._hash
        return b

    def clear(self) -> None:
        self._cells = [None] * CELL_COUNT
        self._piece_bitboards = [0] * _PIECE_TYPE_COUNT
        self._king_index = None
        self._hash = 0

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Canonical starting layout."""
        b = cls()
        for row, col in _INITIAL_ATTACKERS:
            b[Position(row, col)] = PieceType.ATTACKER
        for row, col in _INITIAL_DEFENDERS:
            b[Position(row, col)] = PieceType.DEFENDER
        b[Position(5, 5)] = PieceType.KING
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = self._cells[row * BOARD_SIZE : (row + 1) * BOARD_SIZE]
            line = " ".join("." if p is None else piece_char(p) for p in cells)
            rows.append(f"{row + 1:>2} {line}")
        rows.append("   a b c d e f g h i j k")
        return "\n".join(rows)


def create_initial_board() -> Board:
    """Fresh board with the canonical starting layout."""
    return Board.initial()
