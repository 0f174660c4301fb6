"""LRU-bounded transposition table keyed by Zobrist hash and side to move."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from hnefatafl.core.zobrist import side_to_move_key

if TYPE_CHECKING:
    from hnefatafl.core.board import Board
    from hnefatafl.core.enums import Role
    from hnefatafl.core.move import Move


class Bound(IntEnum):
    """How a stored score relates to the true value."""

    EXACT = 0
    LOWER = 1
    UPPER = 2


@dataclass(slots=True)
class TTEntry:
    depth: int
    score: float
    bound: Bound
    best_move: Move | None


class TranspositionTable:
    """Position cache with least-recently-used eviction.

    A deeper stored result is never replaced by a shallower one; both
    lookups and stores refresh an entry's recency.
    """

    __slots__ = ("_entries", "_max_entries")

    def __init__(self, max_entries: int = 200_000) -> None:
        if max_entries <= 0:
            raise ValueError("Transposition table needs room for at least one entry")
        self._entries: OrderedDict[int, TTEntry] = OrderedDict()
        self._max_entries = max_entries

    @staticmethod
    def key(board: Board, side_to_move: Role) -> int:
        return board.zobrist_hash ^ side_to_move_key(side_to_move)

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: int) -> bool:
        return key in self._entries

    def get(self, key: int) -> TTEntry | None:
        entry = self._entries.get(key)
        if entry is not None:
            self._entries.move_to_end(key)
        return entry

    def store(
        self,
        key: int,
        depth: int,
        score: float,
        bound: Bound,
        best_move: Move | None,
    ) -> None:
        existing = self._entries.get(key)
        if existing is not None:
            self._entries.move_to_end(key)
            if existing.depth > depth:
                return
        self._entries[key] = TTEntry(depth=depth, score=score, bound=bound, best_move=best_move)
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()
