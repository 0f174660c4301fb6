"""Qt bridge to run AI move search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from hnefatafl.ai.config import AIConfig
from hnefatafl.ai.controller import AIController
from hnefatafl.core.board import Board
from hnefatafl.core.enums import Role

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes AI moves on demand.

    One worker serves one game: it owns the game's :class:`AIController`.
    """

    best_move_ready = pyqtSignal(int, object, float, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_controller")

    def __init__(
        self,
        config: AIConfig | None = None,
        *,
        controller: AIController | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller or AIController(config or AIConfig())
        self._cancel_event = threading.Event()

    @property
    def controller(self) -> AIController:
        return self._controller

    @pyqtSlot(object, object, int)
    def request_move(self, board_obj: object, role_obj: object, request_id: int) -> None:
        """Search for the best move on *board_obj* for *role_obj* and emit result."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Engine received invalid board")
            return
        if not isinstance(role_obj, Role):
            self.search_error.emit(request_id, "Engine received invalid role")
            return

        self._cancel_event.clear()
        try:
            move = self._controller.get_best_move(
                board_obj,
                role_obj,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("Search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        result = self._controller.last_result
        if move is None or result is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(
            request_id,
            move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot()
    def new_game(self) -> None:
        """Forget the previous game's search tables."""
        self._controller.reset()
