"""Concrete player implementations."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from hnefatafl.core.enums import Role
from hnefatafl.game.interfaces import IPlayer

if TYPE_CHECKING:
    from hnefatafl.ai.controller import AIController
    from hnefatafl.core.board import Board
    from hnefatafl.core.move import Move


class HumanPlayer(IPlayer):
    """A human participant — moves come from the UI.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_role", "_name")

    def __init__(self, role: Role, name: str = "") -> None:
        self._role = role
        self._name = name or f"Player ({role})"

    @property
    def role(self) -> Role:
        return self._role

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, board: Board) -> None:
        pass  # Human moves arrive via controller.submit_move()

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """An AI participant that delegates computation to a callback.

    The search is decoupled: ``AIPlayer`` only stores a *bridge* callable
    invoked on ``request_move``. In a Qt application that callable posts
    the board to an ``EngineWorker`` running in a ``QThread``; for
    synchronous play use :meth:`synchronous`.

    Args:
        role: Side the AI plays.
        name: Display name.
        on_request_move: ``(Board, Role) -> None``, called when the game
            controller asks the AI to start thinking.
        on_cancel: ``() -> None``, called to abort a running search.
    """

    __slots__ = ("_role", "_name", "_on_request_move", "_on_cancel")

    def __init__(
        self,
        role: Role,
        name: str = "Engine",
        on_request_move: Callable[[Board, Role], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._role = role
        self._name = name
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @classmethod
    def synchronous(
        cls,
        role: Role,
        controller: AIController,
        submit: Callable[[Move], object],
        name: str = "Engine",
    ) -> AIPlayer:
        """Player that searches on the calling thread and submits the result."""

        def _think(board: Board, side: Role) -> None:
            move = controller.get_best_move(board, side)
            if move is not None:
                submit(move)

        return cls(role, name, on_request_move=_think)

    @property
    def role(self) -> Role:
        return self._role

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, board: Board) -> None:
        if self._on_request_move is not None:
            self._on_request_move(board, self._role)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
