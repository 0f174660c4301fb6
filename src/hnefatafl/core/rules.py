"""High-level Hnefatafl rules: move application, captures, game end."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hnefatafl.core.enums import PieceType, Role, WinCondition
from hnefatafl.core.errors import InvalidMove
from hnefatafl.core.move import Move
from hnefatafl.core.move_generator import MoveGenerator, capture_targets
from hnefatafl.core.types import (
    ORTHOGONAL_DIRS,
    THRONE,
    Position,
    is_corner,
    is_special_square,
)

if TYPE_CHECKING:
    from hnefatafl.core.board import Board


@dataclass(frozen=True, slots=True)
class Outcome:
    """Decided game: who won and how."""

    winner: Role
    condition: WinCondition


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Rule set:
    # - Sandwich captures against enemy pieces, with the board edge, the
    #   throne (empty or not) and the corners acting as hostile squares.
    # - The king is taken only by encirclement, checked as a game-end
    #   condition rather than as a capture.

    @staticmethod
    def is_legal_move(board: Board, from_pos: Position, to_pos: Position) -> bool:
        return MoveGenerator(board).is_legal_move(from_pos, to_pos)

    @staticmethod
    def generate_legal_moves(board: Board, role: Role) -> list[Move]:
        return MoveGenerator(board).generate_legal_moves(role)

    @staticmethod
    def has_legal_moves(board: Board, role: Role) -> bool:
        return MoveGenerator(board).has_legal_moves(role)

    @staticmethod
    def resolve_captures(board: Board, landed: Position) -> tuple[Position, ...]:
        """Pieces captured by the piece that has just landed on *landed*."""
        mover = board.get(landed)
        if mover is None:
            return ()
        return capture_targets(board, landed, mover)

    @staticmethod
    def validate_move(
        board: Board,
        role: Role,
        from_pos: Position,
        to_pos: Position,
    ) -> Move:
        """Build the move ``from_pos → to_pos`` for *role* or raise :class:`InvalidMove`."""
        if not from_pos.is_on_board or not to_pos.is_on_board:
            raise InvalidMove("position is off the board", from_pos, to_pos)
        piece = board[from_pos]
        if piece is None:
            raise InvalidMove(f"no piece on {from_pos}", from_pos, to_pos)
        if piece.role != role:
            raise InvalidMove(f"{piece} does not belong to the {role}", from_pos, to_pos)
        reason = MoveGenerator(board).illegal_reason(from_pos, to_pos)
        if reason is not None:
            raise InvalidMove(reason, from_pos, to_pos)
        return Move(
            from_pos,
            to_pos,
            piece,
            captured=capture_targets(board, to_pos, piece),
        )

    @staticmethod
    def apply_move(board: Board, move: Move) -> Board:
        """Return a new board with *move* played; *board* is left untouched.

        The move is re-validated and its captures recomputed from *board*.
        """
        piece = board.get(move.from_pos)
        if piece != move.piece:
            raise InvalidMove(
                f"expected {move.piece} on {move.from_pos}, found {piece}",
                move.from_pos,
                move.to_pos,
            )
        checked = Rules.validate_move(board, move.piece.role, move.from_pos, move.to_pos)
        return Rules.play(board, checked)

    @staticmethod
    def play(board: Board, move: Move) -> Board:
        """Copy *board* and play an already-generated *move* on the copy."""
        child = board.copy()
        child[move.from_pos] = None
        child[move.to_pos] = move.piece
        for pos in move.captured:
            child[pos] = None
        return child

    # ── Game end ─────────────────────────────────────────────────────────

    @staticmethod
    def is_king_captured(board: Board, king: Position) -> bool:
        """Whether the king on *king* is fully encircled."""
        if king == THRONE:
            return all(
                board.get(king.offset(d_row, d_col)) == PieceType.ATTACKER
                for d_row, d_col in ORTHOGONAL_DIRS
            )

        if king.distance(THRONE) == 1:
            # Empty throne stands in for the fourth attacker.
            if board.get(THRONE) is not None:
                return False
            for d_row, d_col in ORTHOGONAL_DIRS:
                neighbour = king.offset(d_row, d_col)
                if neighbour == THRONE:
                    continue
                if board.get(neighbour) != PieceType.ATTACKER:
                    return False
            return True

        for d_row, d_col in ORTHOGONAL_DIRS:
            neighbour = king.offset(d_row, d_col)
            if not neighbour.is_on_board:
                continue
            occupant = board.get(neighbour)
            if occupant == PieceType.ATTACKER:
                continue
            if occupant is None and is_special_square(neighbour):
                continue
            return False
        return True

    @staticmethod
    def detect_terminal(board: Board) -> Outcome | None:
        """Decided outcome of *board*, or ``None`` while the game goes on."""
        king = board.king_position
        if king is None:
            return Outcome(Role.ATTACKER, WinCondition.KING_CAPTURED)
        if is_corner(king):
            return Outcome(Role.DEFENDER, WinCondition.KING_ESCAPED)
        if Rules.is_king_captured(board, king):
            return Outcome(Role.ATTACKER, WinCondition.KING_CAPTURED)
        return None


# ── Functional facade ────────────────────────────────────────────────────────

is_legal_move = Rules.is_legal_move
generate_legal_moves = Rules.generate_legal_moves
has_legal_moves = Rules.has_legal_moves
resolve_captures = Rules.resolve_captures
validate_move = Rules.validate_move
apply_move = Rules.apply_move
detect_terminal = Rules.detect_terminal
