"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from hnefatafl.core.enums import PieceType
from hnefatafl.core.types import Position


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single move.

    ``captured`` is derived by the rules engine from the board the move is
    played on, and ``timestamp`` is bookkeeping, so neither takes part in
    equality or hashing.
    """

    from_pos: Position
    to_pos: Position
    piece: PieceType
    captured: tuple[Position, ...] = field(default=(), compare=False)
    timestamp: float = field(default=0.0, compare=False)

    @property
    def is_capture(self) -> bool:
        return bool(self.captured)

    def stamped(self, timestamp: float) -> Move:
        """Copy of this move carrying *timestamp*."""
        return replace(self, timestamp=timestamp)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_pos}-{self.to_pos}"
        if self.captured:
            base += "".join(f"x{pos}" for pos in self.captured)
        return base
