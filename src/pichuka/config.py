"""Configuration system for the PICHUKA game.

All tunable constants are expressed in "reference frame" units: values were
tuned for a 60 Hz display, so gravity is px/frame^2, speeds are px/frame and
the integrators scale them by ``REFERENCE_FPS * dt`` to stay consistent on
variable frame rates.

This design separates:
- Flyer attributes (how the controllable entity falls and jumps) - FlyerConfig
- Gate attributes (size, spacing and scroll speed of obstacles) - GateConfig
- Display and persistence settings - GameConfig
"""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Any, Optional


# Frame rate the per-frame constants were tuned at
REFERENCE_FPS: int = 60

# Longest simulated step per frame (s); longer stalls are clamped
MAX_FRAME_STEP: float = 0.05

# Gates are evicted once their trailing edge is at or left of -EVICTION_MARGIN
EVICTION_MARGIN: float = 10.0

# Display-only rotation range for the flyer (degrees)
ROTATION_LIMITS: Tuple[float, float] = (-25.0, 70.0)
ROTATION_PER_VELOCITY: float = 4.0


@dataclass
class FlyerConfig:
    """Attributes of the player-controlled flyer."""

    x: float = 90.0  # Fixed horizontal position (px from left edge)
    gravity: float = 0.45  # px/frame^2, positive = down (screen coordinates)
    jump_strength: float = -8.5  # Velocity set by an impulse (px/frame), negative = up

    # Collision box
    width: float = 38.0
    height: float = 28.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": self.x,
            "gravity": self.gravity,
            "jump_strength": self.jump_strength,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "FlyerConfig":
        return cls(
            x=d.get("x", 90.0),
            gravity=d.get("gravity", 0.45),
            jump_strength=d.get("jump_strength", -8.5),
            width=d.get("width", 38.0),
            height=d.get("height", 28.0),
        )


@dataclass
class GateConfig:
    """Obstacle parameters. Constant for the lifetime of a session."""

    speed: float = 2.4  # Scroll speed (px/frame)
    width: float = 68.0  # Horizontal extent of both segments
    gap: float = 170.0  # Vertical opening between top and bottom segment
    spawn_interval_ms: float = 1550.0  # Time between spawns (timestamp units)
    min_height: float = 70.0  # Minimum height of either segment

    def to_dict(self) -> Dict[str, float]:
        return {
            "speed": self.speed,
            "width": self.width,
            "gap": self.gap,
            "spawn_interval_ms": self.spawn_interval_ms,
            "min_height": self.min_height,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "GateConfig":
        return cls(
            speed=d.get("speed", 2.4),
            width=d.get("width", 68.0),
            gap=d.get("gap", 170.0),
            spawn_interval_ms=d.get("spawn_interval_ms", 1550.0),
            min_height=d.get("min_height", 70.0),
        )


@dataclass
class GameConfig:
    """Complete game configuration combining all parameter groups."""
    flyer: FlyerConfig = field(default_factory=FlyerConfig)
    gates: GateConfig = field(default_factory=GateConfig)

    # Display settings
    screen_width: int = 400
    screen_height: int = 600
    ground_height: float = 80.0
    fps: int = 60

    # Where the pygame front-end keeps the high score (None = memory only)
    high_score_path: Optional[str] = "data/high_score.json"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "flyer": self.flyer.to_dict(),
            "gates": self.gates.to_dict(),
            "screen_width": self.screen_width,
            "screen_height": self.screen_height,
            "ground_height": self.ground_height,
            "fps": self.fps,
            "high_score_path": self.high_score_path,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameConfig":
        return cls(
            flyer=FlyerConfig.from_dict(d.get("flyer", {})),
            gates=GateConfig.from_dict(d.get("gates", {})),
            screen_width=d.get("screen_width", 400),
            screen_height=d.get("screen_height", 600),
            ground_height=d.get("ground_height", 80.0),
            fps=d.get("fps", 60),
            high_score_path=d.get("high_score_path", "data/high_score.json"),
        )


# Predefined configurations. Same mechanics, different feel.
CONFIGS = {
    "default": GameConfig(),

    # Wider gaps, slower scroll
    "relaxed": GameConfig(
        flyer=FlyerConfig(gravity=0.4, jump_strength=-8.0),
        gates=GateConfig(speed=2.0, gap=200.0, spawn_interval_ms=1800.0),
    ),

    # Heavy flyer, tight gaps, fast scroll
    "frantic": GameConfig(
        flyer=FlyerConfig(gravity=0.55, jump_strength=-9.0),
        gates=GateConfig(speed=3.2, gap=150.0, spawn_interval_ms=1250.0),
    ),
}
