"""Gate generation, scrolling and eviction.

Gates spawn at the right edge of the field on a fixed interval and scroll
left at a constant speed. The collection keeps spawn order, which is also
right-to-left order, so the oldest gate is always the leftmost.
"""

import logging
import random
from typing import List, Optional

from .config import GateConfig, REFERENCE_FPS, EVICTION_MARGIN
from .entities import Gate
from .geometry import FieldGeometry

logger = logging.getLogger(__name__)


class GateManager:
    """Owns the ordered collection of active gates."""

    def __init__(
        self,
        config: Optional[GateConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            config: Gate parameters. Uses defaults if None.
            rng: Random source for gate heights. Pass a seeded
                ``random.Random`` for reproducible layouts.
        """
        self.config = config or GateConfig()
        self.rng = rng or random.Random()
        self.gates: List[Gate] = []
        self.last_spawn_time: Optional[float] = None

    def __len__(self) -> int:
        return len(self.gates)

    def __iter__(self):
        return iter(self.gates)

    def clear(self) -> None:
        """Drop all gates and forget the spawn timer."""
        self.gates = []
        self.last_spawn_time = None

    def spawn_due(self, now: float) -> bool:
        if self.last_spawn_time is None:
            return True
        return now - self.last_spawn_time >= self.config.spawn_interval_ms

    def maybe_spawn(self, now: float, field: FieldGeometry) -> Optional[Gate]:
        """Spawn a gate at the right edge if the interval has elapsed.

        Returns:
            The new gate, or None if no spawn was due.
        """
        if not self.spawn_due(now):
            return None

        gate = self.create_gate(field)
        self.gates.append(gate)
        self.last_spawn_time = now
        logger.debug("Spawned gate at x=%.1f top=%.1f", gate.x, gate.top_height)
        return gate

    def create_gate(self, field: FieldGeometry) -> Gate:
        """Build a gate with a random top height.

        The top height is uniform in [min_height, available - gap - min_height]
        so both segments meet the minimum height.
        """
        cfg = self.config
        available = field.available_height
        max_top = available - cfg.gap - cfg.min_height
        top_height = self.rng.uniform(cfg.min_height, max_top)
        bottom_y = top_height + cfg.gap
        return Gate(
            x=field.width,
            top_height=top_height,
            bottom_y=bottom_y,
            bottom_height=available - bottom_y,
            width=cfg.width,
        )

    def advance(self, dt: float) -> None:
        """Scroll every gate left by speed * 60 * dt."""
        move_by = self.config.speed * REFERENCE_FPS * dt
        for gate in self.gates:
            gate.x -= move_by

    def evict(self) -> List[Gate]:
        """Remove gates that have scrolled past the left boundary.

        A gate stays while its trailing edge is strictly right of
        -EVICTION_MARGIN. Remaining gates keep their order.

        Returns:
            The evicted gates, oldest first.
        """
        kept = []
        evicted = []
        for gate in self.gates:
            if gate.trailing_edge > -EVICTION_MARGIN:
                kept.append(gate)
            else:
                evicted.append(gate)
        self.gates = kept
        return evicted
