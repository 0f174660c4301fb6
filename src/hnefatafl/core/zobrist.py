"""Zobrist hashing keys for incremental board hashing."""

from __future__ import annotations

from typing import Final

from hnefatafl.core.enums import PieceType, Role
from hnefatafl.core.types import CELL_COUNT

_SEED: Final = 0x5C3A9E17D24B6F81
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF
_PIECE_TYPE_COUNT: Final = len(PieceType)


def _splitmix64(state: int) -> int:
    """Deterministic 64-bit bit-mixer suitable for static key generation."""
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


def _nth_key(index: int) -> int:
    return _splitmix64(_SEED + index)


_PIECE_KEYS: Final = tuple(
    tuple(_nth_key((ptype * CELL_COUNT) + idx) for idx in range(CELL_COUNT))
    for ptype in range(_PIECE_TYPE_COUNT)
)
_DEFENDER_TO_MOVE_KEY: Final = _nth_key(_PIECE_TYPE_COUNT * CELL_COUNT)


def piece_key(piece: PieceType, index: int) -> int:
    """Hash key for *piece* on the cell with flat *index*."""
    return _PIECE_KEYS[int(piece) - 1][index]


def side_to_move_key(role: Role) -> int:
    """Hash toggle for the side to move (zero for attackers)."""
    return _DEFENDER_TO_MOVE_KEY if role == Role.DEFENDER else 0
