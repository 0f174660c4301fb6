"""Exception taxonomy for the rules engine and its callers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hnefatafl.core.enums import Role
    from hnefatafl.core.types import Position


class HnefataflError(Exception):
    """Base class for all domain errors."""


class InvalidMove(HnefataflError, ValueError):
    """A requested move breaks the rules and was rejected."""

    def __init__(
        self,
        reason: str,
        from_pos: Position | None = None,
        to_pos: Position | None = None,
    ) -> None:
        self.reason = reason
        self.from_pos = from_pos
        self.to_pos = to_pos
        if from_pos is not None and to_pos is not None:
            super().__init__(f"Invalid move {from_pos}-{to_pos}: {reason}")
        else:
            super().__init__(f"Invalid move: {reason}")


class NoLegalMoves(HnefataflError):
    """The side to move has no legal move at all."""

    def __init__(self, role: Role) -> None:
        self.role = role
        super().__init__(f"No legal moves for {role}")


class InvalidBoard(HnefataflError, ValueError):
    """Board data is malformed or breaks a placement invariant."""
