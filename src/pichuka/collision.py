"""Collision and scoring evaluation for one frame.

Two passes, in order:

1. Scoring: every unscored gate whose trailing edge the flyer's leading edge
   has strictly passed is flagged and counted.
2. Collision: touching the top of the field or the ground line is fatal
   (inclusive comparison); hitting a gate segment requires real overlap
   (strict comparison, see ``Rect.intersects``).

Points counted in pass 1 stand even when pass 2 ends the session.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

from .entities import Gate
from .geometry import Rect


class Outcome(Enum):
    """Result of evaluating one frame."""
    CONTINUE = auto()
    SCORED = auto()
    COLLISION = auto()


@dataclass
class Evaluation:
    """What happened this frame."""
    scored: int = 0
    collided: bool = False
    cause: Optional[str] = None  # "ceiling", "ground", "gate"

    @property
    def outcome(self) -> Outcome:
        if self.collided:
            return Outcome.COLLISION
        if self.scored:
            return Outcome.SCORED
        return Outcome.CONTINUE


def score_gates(flyer: Rect, gates: Iterable[Gate]) -> int:
    """Flag gates the flyer has passed. Each gate is counted at most once."""
    passed = 0
    for gate in gates:
        if not gate.scored and flyer.right > gate.trailing_edge:
            gate.scored = True
            passed += 1
    return passed


def find_collision(flyer: Rect, field: Rect, gates: Iterable[Gate]) -> Optional[str]:
    """Return the collision cause, or None. Gates are scanned in spawn order."""
    if flyer.top <= field.top:
        return "ceiling"
    if flyer.bottom >= field.bottom:
        return "ground"
    for gate in gates:
        if flyer.intersects(gate.top_rect) or flyer.intersects(gate.bottom_rect):
            return "gate"
    return None


class CollisionEvaluator:
    """Runs the scoring pass then the collision pass."""

    def evaluate(self, flyer: Rect, field: Rect, gates: Iterable[Gate]) -> Evaluation:
        """
        Args:
            flyer: Flyer collision box.
            field: Playable area; its bottom edge is the ground line.
            gates: Active gates in spawn order.
        """
        gates = list(gates)
        scored = score_gates(flyer, gates)
        cause = find_collision(flyer, field, gates)
        return Evaluation(scored=scored, collided=cause is not None, cause=cause)
