"""Abstract interfaces for the game layer.

Follows Dependency Inversion: high-level GameController depends on
these ABCs, not on concrete Player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, StrEnum, auto
from typing import TYPE_CHECKING

from hnefatafl.core.enums import Role, WinCondition

if TYPE_CHECKING:
    from hnefatafl.core.board import Board
    from hnefatafl.core.move import Move


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a Hnefatafl game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # AI is computing
    GAME_OVER = auto()


class GameEndReason(StrEnum):
    KING_CAPTURED = WinCondition.KING_CAPTURED.value
    KING_ESCAPED = WinCondition.KING_ESCAPED.value
    NO_LEGAL_MOVES = "no_legal_moves"
    RESIGNATION = "resignation"
    REPETITION = "repetition"

    @classmethod
    def from_condition(cls, condition: WinCondition) -> GameEndReason:
        return cls(condition.value)


@dataclass(frozen=True, slots=True)
class GameResult:
    """Final result; ``winner`` is ``None`` for a draw."""

    winner: Role | None
    reason: GameEndReason

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    def __str__(self) -> str:
        if self.winner is None:
            return f"draw ({self.reason})"
        return f"{self.winner} wins ({self.reason})"


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def role(self) -> Role: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, board: Board) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via UI).
        For AI this kicks off the search.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (AI only, no-op for human)."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        attacker: IPlayer,
        defender: IPlayer,
        board: Board | None = None,
    ) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def resign(self, role: Role) -> None:
        """Player of *role* resigns."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Undo the last move. Returns True on success."""
