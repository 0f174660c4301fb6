"""Static position evaluation.

Scores are computed with the defender as the positive side and then
flipped for the requested perspective. Heuristic scores are squashed
into ``±HEURISTIC_BOUND`` so that a decided game (``±KING_SAFETY_WEIGHT``)
always outranks any positional judgement.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from hnefatafl.core.enums import PieceType, Role
from hnefatafl.core.move_generator import MoveGenerator
from hnefatafl.core.rules import Rules
from hnefatafl.core.types import CORNERS, ORTHOGONAL_DIRS, THRONE, Position

if TYPE_CHECKING:
    from hnefatafl.core.board import Board

KING_SAFETY_WEIGHT: Final = 1000
KING_ESCAPE_PATH_WEIGHT: Final = 500
PIECE_VALUE: Final = 100
CENTER_CONTROL_WEIGHT: Final = 50
MOBILITY_WEIGHT: Final = 30

NOISE_DIFFICULTY_THRESHOLD: Final = 8
HEURISTIC_BOUND: Final = KING_SAFETY_WEIGHT * 0.4

_HEURISTIC_SCALE: Final = 4000.0
_NOISE_PER_LEVEL: Final = 5.0
_ATTACKER_NEIGHBOUR_PENALTY: Final = 100
_DEFENDER_NEIGHBOUR_BONUS: Final = 50
_THRONE_BONUS: Final = 200
_ESCAPE_REACH: Final = 20
_MAX_ESCAPE_OBSTACLES: Final = 2
_CENTER_RADIUS: Final = 2


@dataclass(frozen=True, slots=True)
class Personality:
    """Playing style; every trait is clamped to [0, 1]."""

    name: str = "Balanced"
    aggressiveness: float = 0.5
    risk_tolerance: float = 0.5
    king_protection: float = 0.6
    center_control: float = 0.7

    def __post_init__(self) -> None:
        for trait in ("aggressiveness", "risk_tolerance", "king_protection", "center_control"):
            value = float(getattr(self, trait))
            object.__setattr__(self, trait, min(1.0, max(0.0, value)))


PERSONALITIES: Final[dict[str, Personality]] = {
    "aggressive": Personality("Aggressive", 0.8, 0.7, 0.4, 0.6),
    "defensive": Personality("Defensive", 0.3, 0.2, 0.9, 0.5),
    "balanced": Personality("Balanced", 0.5, 0.5, 0.6, 0.7),
}


@dataclass(frozen=True, slots=True)
class EvaluationBreakdown:
    """Weighted heuristic terms, defender-positive, before difficulty scaling."""

    king_safety: float
    escape: float
    material: float
    center: float
    mobility: float

    @property
    def total(self) -> float:
        return self.king_safety + self.escape + self.material + self.center + self.mobility


class Evaluator:
    """Personality- and difficulty-aware position scorer.

    Args:
        personality: Style weights; defaults to the balanced preset.
        difficulty: 1–10. Scales the heuristic and, below
            ``NOISE_DIFFICULTY_THRESHOLD``, adds bounded noise.
        rng: Random source for the noise; a ``random.Random(0)`` by
            default, so unseeded evaluators are reproducible too.
    """

    __slots__ = ("_personality", "_difficulty", "_rng")

    def __init__(
        self,
        personality: Personality | None = None,
        difficulty: int = 10,
        rng: random.Random | None = None,
    ) -> None:
        if not 1 <= difficulty <= 10:
            raise ValueError(f"Difficulty must be in 1..10, got {difficulty}")
        self._personality = personality or PERSONALITIES["balanced"]
        self._difficulty = difficulty
        self._rng = rng or random.Random(0)

    @property
    def personality(self) -> Personality:
        return self._personality

    @property
    def difficulty(self) -> int:
        return self._difficulty

    @property
    def adds_noise(self) -> bool:
        return self._difficulty < NOISE_DIFFICULTY_THRESHOLD

    # ── Public API ───────────────────────────────────────────────────────

    def evaluate(self, board: Board, perspective: Role) -> float:
        """Score *board* for *perspective*; positive is good for that side."""
        outcome = Rules.detect_terminal(board)
        if outcome is not None:
            score = float(
                KING_SAFETY_WEIGHT if outcome.winner == Role.DEFENDER else -KING_SAFETY_WEIGHT
            )
        else:
            raw = self.breakdown(board).total * (self._difficulty / 10)
            score = HEURISTIC_BOUND * math.tanh(raw / _HEURISTIC_SCALE)
            if self.adds_noise:
                amplitude = (10 - self._difficulty) * _NOISE_PER_LEVEL
                score += self._rng.uniform(-amplitude, amplitude)
        return score if perspective == Role.DEFENDER else -score

    def breakdown(self, board: Board) -> EvaluationBreakdown:
        """Per-term heuristic scores for a board that still has a king."""
        p = self._personality
        king = board.king_position
        gen = MoveGenerator(board)

        king_safety = 0.0
        escape = 0.0
        if king is not None:
            king_safety = _king_safety(board, king) * p.king_protection
            escape = (
                _escape_potential(board, king)
                * (KING_ESCAPE_PATH_WEIGHT / _ESCAPE_REACH)
                * (0.5 + p.risk_tolerance / 2)
            )

        material = (
            (board.count(PieceType.DEFENDER) - board.count(PieceType.ATTACKER))
            * PIECE_VALUE
            * (0.5 + p.aggressiveness / 2)
        )
        center = _center_control(board) * CENTER_CONTROL_WEIGHT * p.center_control
        mobility = (
            gen.count_legal_moves(Role.DEFENDER) - gen.count_legal_moves(Role.ATTACKER)
        ) * MOBILITY_WEIGHT

        return EvaluationBreakdown(
            king_safety=king_safety,
            escape=escape,
            material=material,
            center=center,
            mobility=mobility,
        )


def evaluate(
    board: Board,
    perspective: Role,
    personality: Personality | None = None,
    difficulty: int = 10,
    rng: random.Random | None = None,
) -> float:
    """One-shot evaluation; see :meth:`Evaluator.evaluate`."""
    return Evaluator(personality, difficulty, rng).evaluate(board, perspective)


# ── Heuristic terms ──────────────────────────────────────────────────────────


def _king_safety(board: Board, king: Position) -> float:
    threatened = 0
    protected = 0
    for d_row, d_col in ORTHOGONAL_DIRS:
        piece = board.get(king.offset(d_row, d_col))
        if piece == PieceType.ATTACKER:
            threatened += 1
        elif piece == PieceType.DEFENDER:
            protected += 1

    safety = protected * _DEFENDER_NEIGHBOUR_BONUS - threatened * _ATTACKER_NEIGHBOUR_PENALTY
    if king == THRONE:
        safety += _THRONE_BONUS
    return float(safety)


def _path_obstacles(board: Board, start: Position, target: Position) -> int:
    """Attackers on a staircase path from *start* towards *target*."""
    obstacles = 0
    cur = start
    while cur != target:
        d_row = (target.row > cur.row) - (target.row < cur.row)
        d_col = (target.col > cur.col) - (target.col < cur.col)
        cur = cur.offset(d_row, d_col)
        if board.get(cur) == PieceType.ATTACKER:
            obstacles += 1
    return obstacles


def _escape_potential(board: Board, king: Position) -> float:
    score = 0
    for corner in CORNERS:
        if _path_obstacles(board, king, corner) <= _MAX_ESCAPE_OBSTACLES:
            score += max(0, _ESCAPE_REACH - king.distance(corner))
    return float(score)


def _center_control(board: Board) -> float:
    score = 0
    for row in range(THRONE.row - _CENTER_RADIUS, THRONE.row + _CENTER_RADIUS + 1):
        for col in range(THRONE.col - _CENTER_RADIUS, THRONE.col + _CENTER_RADIUS + 1):
            piece = board.get(Position(row, col))
            if piece is None:
                continue
            pos = Position(row, col)
            weight = max(0, 5 - pos.distance(THRONE))
            if piece == PieceType.ATTACKER:
                score -= weight
            else:
                score += weight
    return float(score)
