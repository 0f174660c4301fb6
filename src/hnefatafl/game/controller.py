"""GameController — the central orchestrator of a Hnefatafl game.

Coordinates: Players, GameState, Rules.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hnefatafl.core.enums import Role
from hnefatafl.core.errors import InvalidMove
from hnefatafl.game.interfaces import GamePhase, GameResult, IGameController, IPlayer
from hnefatafl.game.state import DEFAULT_REPETITION_LIMIT, GameState, MoveRecord

if TYPE_CHECKING:
    from hnefatafl.core.board import Board
    from hnefatafl.core.move import Move

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, "GameState"], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full game: validates moves, switches turns,
    notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread). AI results arrive via ``submit_move``, which an
    ``EngineWorker`` reaches through a queued signal/slot connection.
    """

    __slots__ = (
        "_state",
        "_players",
        "_repetition_limit",
        "_prompting",
        "_prompt_pending",
        "events",
    )

    def __init__(self, *, repetition_limit: int | None = DEFAULT_REPETITION_LIMIT) -> None:
        self._repetition_limit = repetition_limit
        self._state = GameState(repetition_limit=repetition_limit)
        self._players: dict[Role, IPlayer] = {}
        self._prompting = False
        self._prompt_pending = False
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, role: Role) -> IPlayer | None:
        return self._players.get(role)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        attacker: IPlayer,
        defender: IPlayer,
        board: Board | None = None,
    ) -> None:
        if attacker.role != Role.ATTACKER or defender.role != Role.DEFENDER:
            raise ValueError("Players must play the attacker and defender roles")
        self._players = {Role.ATTACKER: attacker, Role.DEFENDER: defender}
        self._state = GameState(board, repetition_limit=self._repetition_limit)

        if self._state.is_game_over:
            assert self._state.result is not None
            self._emit_game_over(self._state.result)
            return
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()

    def submit_move(self, move: Move) -> bool:
        if self._state.is_game_over:
            return False
        if self._state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False

        try:
            record = self._state.apply_move(move)
        except InvalidMove as exc:
            _LOGGER.warning("Rejected move %s: %s", move, exc.reason)
            return False

        self._emit_move(record)

        if self._state.is_game_over:
            assert self._state.result is not None
            self._emit_game_over(self._state.result)
            return True

        self._prompt_current_player()
        return True

    def resign(self, role: Role) -> None:
        if self._state.is_game_over:
            return
        cp = self.current_player
        if cp and not cp.is_human:
            cp.cancel()
        self._state.resign(role)
        assert self._state.result is not None
        self._emit_game_over(self._state.result)

    def undo_move(self) -> bool:
        if self._state.is_game_over or not self._state.move_history:
            return False

        # Cancel AI if it's thinking
        cp = self.current_player
        if cp and not cp.is_human:
            cp.cancel()

        self._state.undo_last_move()
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _prompt_current_player(self) -> None:
        """Ask the current player to move.

        A player that answers from inside ``request_move`` re-enters
        ``submit_move``; that nested prompt is deferred to the loop below.
        """
        if self._prompting:
            self._prompt_pending = True
            return

        self._prompting = True
        try:
            while True:
                self._prompt_pending = False
                cp = self.current_player
                if cp is None or self._state.is_game_over:
                    return

                if cp.is_human:
                    self._state.phase = GamePhase.AWAITING_MOVE
                    self._emit_phase(GamePhase.AWAITING_MOVE)
                    return

                self._state.phase = GamePhase.THINKING
                self._emit_phase(GamePhase.THINKING)
                cp.request_move(self._state.board)
                if not self._prompt_pending:
                    return
        finally:
            self._prompting = False

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self, result: GameResult) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
