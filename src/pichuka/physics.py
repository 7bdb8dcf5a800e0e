"""Physics system using pymunk for the flyer's vertical motion.

Constants are tuned per reference frame (60 Hz). The space works in seconds,
so gravity is scaled by ``REFERENCE_FPS ** 2`` and velocities by
``REFERENCE_FPS``. pymunk integrates with semi-implicit Euler
(velocity first, then position), which with a single step per frame is
exactly::

    v += gravity * 60 * dt
    y += v * 60 * dt
"""

from dataclasses import dataclass
from typing import Optional

import pymunk

from .config import REFERENCE_FPS, MAX_FRAME_STEP


@dataclass
class PhysicsParams:
    """Physics parameters in reference-frame units."""
    gravity: float = 0.45  # px/frame^2, positive = down
    reference_fps: int = REFERENCE_FPS


def clamp_frame_delta(delta_seconds: float, max_step: float = MAX_FRAME_STEP) -> float:
    """Bound the simulated step for a frame.

    Stalled frames (e.g. a backgrounded window) are clamped rather than
    rejected. Timestamps going backwards count as no elapsed time.
    """
    return max(0.0, min(delta_seconds, max_step))


class PhysicsWorld:
    """Manages the pymunk physics simulation.

    Wraps pymunk.Space with game-specific configuration and helpers.
    """

    def __init__(self, params: Optional[PhysicsParams] = None):
        """Initialize physics world with given parameters.

        Args:
            params: Physics parameters. Uses defaults if None.
        """
        self.params = params or PhysicsParams()

        self.space = pymunk.Space()
        self.space.gravity = (0, self.space_gravity)

    @property
    def space_gravity(self) -> float:
        """Gravity in px/s^2 as the space sees it."""
        fps = self.params.reference_fps
        return self.params.gravity * fps * fps

    def step(self, dt: float) -> None:
        """Advance physics simulation by dt seconds.

        A single step per frame: substeps would change the discrete
        trajectory. Zero-length frames are skipped.
        """
        if dt <= 0:
            return
        self.space.step(dt)

    def add_body(self, body: pymunk.Body) -> None:
        """Add a shapeless body to the physics world."""
        self.space.add(body)

    def to_frame_units(self, value_per_second: float) -> float:
        """Convert a px/s velocity to px/frame."""
        return value_per_second / self.params.reference_fps

    def to_second_units(self, value_per_frame: float) -> float:
        """Convert a px/frame velocity to px/s."""
        return value_per_frame * self.params.reference_fps
