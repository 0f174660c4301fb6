"""Mutable game state: board, turn, history and result."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hnefatafl.core.board import Board, create_initial_board
from hnefatafl.core.enums import Role
from hnefatafl.core.move_generator import MoveGenerator
from hnefatafl.core.notation import board_to_text
from hnefatafl.core.rules import Rules
from hnefatafl.game.interfaces import GameEndReason, GamePhase, GameResult

if TYPE_CHECKING:
    from hnefatafl.core.move import Move
    from hnefatafl.core.types import Position

_LOGGER = logging.getLogger(__name__)

DEFAULT_REPETITION_LIMIT = 3


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """One played move with enough context for replay and display."""

    move: Move
    role: Role
    board_text_after: str
    captured: tuple[Position, ...]

    @property
    def was_capture(self) -> bool:
        return bool(self.captured)


class GameState:
    """Board plus everything needed to run a game to its end.

    Attackers move first. The game ends when the king is captured or
    escapes, when the side to move has no legal move (that side loses),
    on resignation, or on repetition.

    Args:
        board: Starting board; the standard layout by default.
        repetition_limit: Number of occurrences of the same board with
            the same side to move that draws the game. ``None`` disables.
    """

    __slots__ = (
        "_board",
        "_side_to_move",
        "_history",
        "_boards_before",
        "_occurrences",
        "_repetition_limit",
        "phase",
        "result",
    )

    def __init__(
        self,
        board: Board | None = None,
        *,
        repetition_limit: int | None = DEFAULT_REPETITION_LIMIT,
    ) -> None:
        if repetition_limit is not None and repetition_limit < 2:
            raise ValueError("Repetition limit must be at least 2")
        self._repetition_limit = repetition_limit
        self.setup(board)
        if self.result is None:
            self.phase = GamePhase.NOT_STARTED

    def setup(self, board: Board | None = None, side_to_move: Role = Role.ATTACKER) -> None:
        """Reset to *board* (copied) with *side_to_move* to play."""
        if board is None:
            start = create_initial_board()
        else:
            board.validate()
            start = board.copy()
        self._board = start
        self._side_to_move = side_to_move
        self._history: list[MoveRecord] = []
        self._boards_before: list[Board] = []
        self._occurrences: dict[tuple[int, Role], int] = {}
        self._count_occurrence(1)
        self.phase = GamePhase.AWAITING_MOVE
        self.result: GameResult | None = None
        self._check_game_end()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def side_to_move(self) -> Role:
        return self._side_to_move

    @property
    def move_history(self) -> list[MoveRecord]:
        return self._history

    @property
    def is_game_over(self) -> bool:
        return self.result is not None

    @property
    def repetition_limit(self) -> int | None:
        return self._repetition_limit

    def legal_moves(self) -> list[Move]:
        if self.is_game_over:
            return []
        return MoveGenerator(self._board).generate_legal_moves(self._side_to_move)

    def occurrences(self) -> int:
        """How often the current board has occurred with this side to move."""
        return self._occurrences.get(self._position_key(), 0)

    # ── Mutations ────────────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Validate and play *move* for the side to move.

        Raises:
            InvalidMove: If the move is illegal here.
            RuntimeError: If the game is already over.
        """
        if self.is_game_over:
            raise RuntimeError("Game is already over")

        checked = Rules.validate_move(
            self._board, self._side_to_move, move.from_pos, move.to_pos
        )
        played = checked.stamped(move.timestamp) if move.timestamp else checked
        self._boards_before.append(self._board)
        self._board = Rules.play(self._board, played)

        record = MoveRecord(
            move=played,
            role=self._side_to_move,
            board_text_after=board_to_text(self._board),
            captured=played.captured,
        )
        self._history.append(record)
        self._side_to_move = self._side_to_move.opposite
        self._count_occurrence(1)
        self._check_game_end()
        return record

    def undo_last_move(self) -> MoveRecord | None:
        """Take back the last move, reopening a finished game."""
        if not self._history:
            return None
        self._count_occurrence(-1)
        record = self._history.pop()
        self._board = self._boards_before.pop()
        self._side_to_move = record.role
        self.result = None
        self.phase = GamePhase.AWAITING_MOVE
        return record

    def resign(self, role: Role) -> None:
        if self.is_game_over:
            return
        self._finish(GameResult(role.opposite, GameEndReason.RESIGNATION))

    # ── Internal helpers ─────────────────────────────────────────────────

    def _position_key(self) -> tuple[int, Role]:
        return self._board.zobrist_hash, self._side_to_move

    def _count_occurrence(self, delta: int) -> None:
        key = self._position_key()
        count = self._occurrences.get(key, 0) + delta
        if count > 0:
            self._occurrences[key] = count
        else:
            self._occurrences.pop(key, None)

    def _check_game_end(self) -> None:
        outcome = Rules.detect_terminal(self._board)
        if outcome is not None:
            self._finish(
                GameResult(outcome.winner, GameEndReason.from_condition(outcome.condition))
            )
            return

        if not MoveGenerator(self._board).has_legal_moves(self._side_to_move):
            _LOGGER.info("%s cannot move and loses", self._side_to_move)
            self._finish(GameResult(self._side_to_move.opposite, GameEndReason.NO_LEGAL_MOVES))
            return

        if self._repetition_limit is not None and self.occurrences() >= self._repetition_limit:
            _LOGGER.info("Position repeated %d times, game drawn", self._repetition_limit)
            self._finish(GameResult(None, GameEndReason.REPETITION))

    def _finish(self, result: GameResult) -> None:
        self.result = result
        self.phase = GamePhase.GAME_OVER
