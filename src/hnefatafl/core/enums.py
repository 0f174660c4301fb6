"""Core enumerations for the Hnefatafl domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Role(IntEnum):
    """Side of the game. Attackers move first."""

    ATTACKER = 0
    DEFENDER = 1

    @property
    def opposite(self) -> Role:
        return Role(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Piece kinds on the board; an empty cell is ``None``."""

    ATTACKER = 1
    DEFENDER = 2
    KING = 3

    @property
    def role(self) -> Role:
        """The side that controls this piece."""
        if self == PieceType.ATTACKER:
            return Role.ATTACKER
        return Role.DEFENDER

    def __str__(self) -> str:
        return self.name.lower()


class WinCondition(StrEnum):
    """How a finished game was decided on the board."""

    KING_CAPTURED = "king_captured"
    KING_ESCAPED = "king_escape"
