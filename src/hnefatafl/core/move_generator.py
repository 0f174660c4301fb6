"""Legal move generation and capture detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hnefatafl.core.enums import PieceType, Role
from hnefatafl.core.move import Move
from hnefatafl.core.piece import belongs_to, is_enemy
from hnefatafl.core.types import (
    CELL_COUNT,
    ORTHOGONAL_DIRS,
    Position,
    is_special_square,
    position_at,
)

if TYPE_CHECKING:
    from hnefatafl.core.board import Board


# -- Precomputed lookup tables ---------------------------------------------


def _build_rays() -> tuple[tuple[tuple[Position, ...], ...], ...]:
    rays_per_cell: list[tuple[tuple[Position, ...], ...]] = []
    for idx in range(CELL_COUNT):
        origin = position_at(idx)
        cell_rays: list[tuple[Position, ...]] = []
        for d_row, d_col in ORTHOGONAL_DIRS:
            ray: list[Position] = []
            cur = origin.offset(d_row, d_col)
            while cur.is_on_board:
                ray.append(cur)
                cur = cur.offset(d_row, d_col)
            cell_rays.append(tuple(ray))
        rays_per_cell.append(tuple(cell_rays))
    return tuple(rays_per_cell)


_RAYS = _build_rays()


def capture_targets(
    board: Board,
    landed: Position,
    mover: PieceType,
) -> tuple[Position, ...]:
    """Enemy pieces sandwiched by *mover* standing on *landed*.

    The cell beyond the victim is hostile when it is off the board, holds
    a piece of the mover's side, or is the throne or a corner. The king is
    never taken by a sandwich.
    """
    captured: list[Position] = []
    for d_row, d_col in ORTHOGONAL_DIRS:
        adjacent = landed.offset(d_row, d_col)
        victim = board.get(adjacent)
        if victim is None or victim == PieceType.KING or not is_enemy(victim, mover):
            continue
        beyond = adjacent.offset(d_row, d_col)
        if (
            not beyond.is_on_board
            or is_special_square(beyond)
            or belongs_to(board.get(beyond), mover.role)
        ):
            captured.append(adjacent)
    return tuple(captured)


class MoveGenerator:
    """Generates legal moves for a board without mutating it."""

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # ── Single-move legality ─────────────────────────────────────────────

    def illegal_reason(self, from_pos: Position, to_pos: Position) -> str | None:
        """Why ``from_pos → to_pos`` is illegal, or ``None`` when it is legal."""
        if not from_pos.is_on_board or not to_pos.is_on_board:
            return "position is off the board"
        board = self._board
        piece = board[from_pos]
        if piece is None:
            return f"no piece on {from_pos}"
        if from_pos == to_pos:
            return "piece must move"
        if board[to_pos] is not None:
            return f"{to_pos} is occupied"
        if from_pos.row != to_pos.row and from_pos.col != to_pos.col:
            return "pieces move in straight lines only"

        is_king = piece == PieceType.KING
        if not is_king and is_special_square(to_pos):
            return f"only the king may stand on {to_pos}"

        d_row = (to_pos.row > from_pos.row) - (to_pos.row < from_pos.row)
        d_col = (to_pos.col > from_pos.col) - (to_pos.col < from_pos.col)
        cur = from_pos.offset(d_row, d_col)
        while cur != to_pos:
            if board[cur] is not None:
                return f"path is blocked at {cur}"
            if not is_king and is_special_square(cur):
                return f"only the king may pass through {cur}"
            cur = cur.offset(d_row, d_col)
        return None

    def is_legal_move(self, from_pos: Position, to_pos: Position) -> bool:
        return self.illegal_reason(from_pos, to_pos) is None

    # ── Enumeration ──────────────────────────────────────────────────────

    def destinations(self, from_pos: Position) -> list[Position]:
        """Every cell the piece on *from_pos* may move to."""
        board = self._board
        piece = board.get(from_pos)
        if piece is None:
            return []

        is_king = piece == PieceType.KING
        targets: list[Position] = []
        for ray in _RAYS[from_pos.index]:
            for cell in ray:
                if board[cell] is not None:
                    break
                if not is_king and is_special_square(cell):
                    break
                targets.append(cell)
        return targets

    def generate_legal_moves(self, role: Role) -> list[Move]:
        """All legal moves for *role*, each carrying the captures it causes."""
        board = self._board
        moves: list[Move] = []
        for from_pos in board.role_pieces(role):
            piece = board[from_pos]
            assert piece is not None
            for to_pos in self.destinations(from_pos):
                moves.append(
                    Move(
                        from_pos,
                        to_pos,
                        piece,
                        captured=capture_targets(board, to_pos, piece),
                    )
                )
        return moves

    def count_legal_moves(self, role: Role) -> int:
        """Number of legal moves for *role* (captures are not computed)."""
        return sum(
            len(self.destinations(from_pos)) for from_pos in self._board.role_pieces(role)
        )

    def has_legal_moves(self, role: Role) -> bool:
        return any(self.destinations(pos) for pos in self._board.role_pieces(role))

    def moves_from(self, from_pos: Position) -> list[Move]:
        """Legal moves for the single piece on *from_pos*."""
        piece = self._board.get(from_pos)
        if piece is None:
            return []
        return [
            Move(
                from_pos,
                to_pos,
                piece,
                captured=capture_targets(self._board, to_pos, piece),
            )
            for to_pos in self.destinations(from_pos)
        ]
