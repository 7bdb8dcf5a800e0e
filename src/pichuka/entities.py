"""Game entities: the Flyer and the Gates it must pass through.

The flyer wraps a pymunk body; gates are plain records moved by the
GateManager.
"""

from dataclasses import dataclass
from typing import Tuple, Optional

import pymunk

from .config import FlyerConfig, ROTATION_LIMITS, ROTATION_PER_VELOCITY
from .geometry import Rect
from .physics import PhysicsWorld


class Flyer:
    """Player-controlled entity. Falls under gravity, jumps on impulse.

    Position is the top-left corner of the collision box in screen
    coordinates. Velocity is reported in px/frame (positive = falling).
    The horizontal position is fixed for the whole session.
    """

    def __init__(
        self,
        physics: PhysicsWorld,
        y: float = 0.0,
        config: Optional[FlyerConfig] = None,
    ):
        """Create the flyer and add it to the physics world.

        Args:
            physics: The physics world to add the flyer to
            y: Initial vertical position
            config: Flyer attributes. Uses defaults if None.
        """
        self.physics = physics
        self.config = config or FlyerConfig()

        # No shapes: collisions are resolved by the evaluator, not pymunk
        self.body = pymunk.Body(1.0, float('inf'))
        self.body.position = (self.config.x, y)
        physics.add_body(self.body)

    @property
    def x(self) -> float:
        return self.body.position.x

    @property
    def y(self) -> float:
        return self.body.position.y

    @property
    def position(self) -> Tuple[float, float]:
        """Current position (x, y)."""
        return self.body.position.x, self.body.position.y

    @property
    def velocity(self) -> float:
        """Vertical velocity in px/frame."""
        return self.physics.to_frame_units(self.body.velocity.y)

    @property
    def rotation_hint(self) -> float:
        """Display angle in degrees derived from velocity. Not simulated."""
        low, high = ROTATION_LIMITS
        return max(low, min(high, self.velocity * ROTATION_PER_VELOCITY))

    def reset(self, y: float) -> None:
        """Place the flyer at y with zero velocity."""
        self.body.position = (self.config.x, y)
        self.body.velocity = (0, 0)

    def integrate(self, dt: float) -> None:
        """Advance gravity by dt seconds. No bounds are enforced here."""
        self.physics.step(dt)

    def apply_impulse(self) -> None:
        """Jump: override the vertical velocity with the jump strength."""
        self.body.velocity = (0, self.physics.to_second_units(self.config.jump_strength))

    def bounds(self, width: float, height: float) -> Rect:
        """Collision box for the given flyer size."""
        return Rect.from_size(self.x, self.y, width, height)


@dataclass
class Gate:
    """A paired top/bottom obstacle at one horizontal position.

    The top segment spans [0, top_height]; the bottom segment spans
    [bottom_y, bottom_y + bottom_height], ending at the ground line of the
    field it was spawned in.
    """
    x: float
    top_height: float
    bottom_y: float
    bottom_height: float
    width: float
    scored: bool = False

    @property
    def gap(self) -> float:
        return self.bottom_y - self.top_height

    @property
    def trailing_edge(self) -> float:
        return self.x + self.width

    @property
    def top_rect(self) -> Rect:
        return Rect(self.x, 0.0, self.x + self.width, self.top_height)

    @property
    def bottom_rect(self) -> Rect:
        return Rect(self.x, self.bottom_y, self.x + self.width, self.bottom_y + self.bottom_height)
