"""Piece helpers: ownership, hostility and text encodings."""

from __future__ import annotations

from hnefatafl.core.enums import PieceType, Role

# Compact text character ↔ PieceType
_CHAR_MAP: dict[str, PieceType] = {
    "A": PieceType.ATTACKER,
    "D": PieceType.DEFENDER,
    "K": PieceType.KING,
}

# Names used by the board-state rows ("attacker", "defender", "king")
_NAME_MAP: dict[str, PieceType] = {str(pt): pt for pt in PieceType}

_UNICODE: dict[PieceType, str] = {
    PieceType.KING: "♔",
    PieceType.DEFENDER: "♗",
    PieceType.ATTACKER: "♜",
}

_CHARS: dict[PieceType, str] = {v: k for k, v in _CHAR_MAP.items()}


def piece_char(piece: PieceType) -> str:
    """Single-letter code, e.g. KING → 'K'."""
    return _CHARS[piece]


def piece_from_char(char: str) -> PieceType:
    """Create piece from its single-letter code, e.g. 'A' → ATTACKER."""
    try:
        return _CHAR_MAP[char]
    except KeyError:
        raise ValueError(f"Invalid piece character: {char!r}") from None


def piece_from_name(name: str) -> PieceType:
    """Create piece from its lowercase name, e.g. 'defender'."""
    try:
        return _NAME_MAP[name]
    except KeyError:
        raise ValueError(f"Invalid piece name: {name!r}") from None


def piece_symbol(piece: PieceType) -> str:
    """Unicode symbol, e.g. ♔."""
    return _UNICODE[piece]


def belongs_to(piece: PieceType | None, role: Role) -> bool:
    """Whether *piece* is moved by *role*."""
    return piece is not None and piece.role == role


def is_enemy(piece: PieceType | None, mover: PieceType) -> bool:
    """Whether *piece* stands on the other side from *mover*."""
    return piece is not None and piece.role != mover.role
