"""Game-facing entry points: validate human moves, ask the AI for moves."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hnefatafl.ai.config import AIConfig
from hnefatafl.ai.controller import AIController
from hnefatafl.core.errors import InvalidMove, NoLegalMoves
from hnefatafl.core.rules import Rules
from hnefatafl.game.state import DEFAULT_REPETITION_LIMIT, GameState
from hnefatafl.settings import load_settings

if TYPE_CHECKING:
    import os

    from hnefatafl.core.board import Board
    from hnefatafl.core.enums import Role
    from hnefatafl.core.move import Move
    from hnefatafl.core.types import Position

_LOGGER = logging.getLogger(__name__)


def request_legal_move(
    board: Board, role: Role, from_pos: Position, to_pos: Position
) -> tuple[Move, Board]:
    """Validate a move and return it with the resulting board.

    Raises:
        InvalidMove: If *role* may not play ``from_pos -> to_pos``.
    """
    move = Rules.validate_move(board, role, from_pos, to_pos)
    return move, Rules.play(board, move)


def request_ai_move(
    controller: AIController,
    board: Board,
    role: Role,
    time_limit_ms: int | None = None,
) -> Move | None:
    """Ask *controller* for *role*'s move; ``None`` if it cannot move."""
    return controller.get_best_move(board, role, time_limit_ms)


class GameSession:
    """One game: its state and the AI controller playing in it.

    Args:
        config: AI settings; defaults to :class:`AIConfig` defaults.
        controller: Pre-built controller, e.g. one with a custom engine.
        board: Starting board; the standard layout by default.
        repetition_limit: See :class:`GameState`.
    """

    __slots__ = ("_state", "_controller")

    def __init__(
        self,
        config: AIConfig | None = None,
        *,
        controller: AIController | None = None,
        board: Board | None = None,
        repetition_limit: int | None = DEFAULT_REPETITION_LIMIT,
    ) -> None:
        self._controller = controller or AIController(config or AIConfig())
        self._state = GameState(board, repetition_limit=repetition_limit)

    @classmethod
    def from_settings(
        cls,
        path: str | os.PathLike[str] | None = None,
        *,
        environ: dict[str, str] | None = None,
        board: Board | None = None,
    ) -> GameSession:
        """Session whose AI is configured by :func:`~hnefatafl.settings.load_settings`."""
        settings = load_settings(path, environ=environ)
        return cls(settings.ai_config(), board=board)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def controller(self) -> AIController:
        return self._controller

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def side_to_move(self) -> Role:
        return self._state.side_to_move

    def new_game(self, board: Board | None = None) -> None:
        """Start over, forgetting the AI's search tables."""
        self._state.setup(board)
        self._controller.reset()

    def request_legal_move(
        self, board: Board, role: Role, from_pos: Position, to_pos: Position
    ) -> Move:
        """Validate a human move and play it in this session.

        Raises:
            InvalidMove: If the game is over, *board* is not the session's
                current board, it is not *role*'s turn, or the move is illegal.
        """
        if self._state.is_game_over:
            raise InvalidMove("game is over", from_pos, to_pos)
        if board != self._state.board:
            raise InvalidMove("board does not match the game in progress", from_pos, to_pos)
        if role != self._state.side_to_move:
            raise InvalidMove(f"it is not the {role}'s turn", from_pos, to_pos)

        move = Rules.validate_move(board, role, from_pos, to_pos)
        record = self._state.apply_move(move)
        return record.move

    def request_ai_move(
        self, board: Board, role: Role, time_limit_ms: int | None = None
    ) -> Move | None:
        """The session AI's choice for *role* on *board*; nothing is played."""
        return request_ai_move(self._controller, board, role, time_limit_ms)

    def require_ai_move(
        self, board: Board, role: Role, time_limit_ms: int | None = None
    ) -> Move:
        """Like :meth:`request_ai_move` but raises :class:`NoLegalMoves`."""
        move = self.request_ai_move(board, role, time_limit_ms)
        if move is None:
            raise NoLegalMoves(role)
        return move

    def play_ai_move(self, time_limit_ms: int | None = None) -> Move | None:
        """Let the AI move for the side to play and apply its choice."""
        if self._state.is_game_over:
            return None
        role = self._state.side_to_move
        move = self.request_ai_move(self._state.board, role, time_limit_ms)
        if move is None:
            return None
        record = self._state.apply_move(move)
        _LOGGER.debug("AI played %s for %s", record.move, role)
        return record.move
