"""Play-field geometry: rectangles and the geometry provider interface.

All coordinates are screen coordinates: origin at the top-left of the play
field, y grows downward.
"""

from dataclasses import dataclass

from .config import GameConfig


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box given by its four edges."""
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> "Rect":
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def intersects(self, other: "Rect") -> bool:
        """Strict overlap test. Boxes that only share an edge do not intersect."""
        return (
            self.left < other.right
            and self.right > other.left
            and self.top < other.bottom
            and self.bottom > other.top
        )


@dataclass(frozen=True)
class FieldGeometry:
    """One measurement of the play field and the flyer's size."""
    width: float
    height: float
    ground_height: float
    flyer_width: float
    flyer_height: float

    @property
    def ground_y(self) -> float:
        """Y coordinate of the top of the ground strip."""
        return self.height - self.ground_height

    @property
    def available_height(self) -> float:
        """Playable height above the ground strip."""
        return self.height - self.ground_height

    @property
    def bounds(self) -> Rect:
        """Playable area (excludes the ground strip)."""
        return Rect(0.0, 0.0, self.width, self.ground_y)

    def fits_gates(self, gap: float, min_height: float) -> bool:
        """Whether a gate with this gap and segment minimum fits the field.

        Gate generation assumes this holds; it is not checked per frame.
        """
        return self.available_height - gap - min_height >= min_height


class GeometryProvider:
    """Source of field geometry, queried once per frame."""

    def measure(self) -> FieldGeometry:
        raise NotImplementedError


class FixedGeometry(GeometryProvider):
    """Geometry that never changes. Used headless and in tests."""

    def __init__(self, geometry: FieldGeometry):
        self.geometry = geometry

    @classmethod
    def from_config(cls, config: GameConfig) -> "FixedGeometry":
        return cls(FieldGeometry(
            width=config.screen_width,
            height=config.screen_height,
            ground_height=config.ground_height,
            flyer_width=config.flyer.width,
            flyer_height=config.flyer.height,
        ))

    def measure(self) -> FieldGeometry:
        return self.geometry
