"""pichuka: side-scrolling gate-flying game with a headless simulation core.

A flyer falls under gravity and jumps on a single "activate" input while
paired gates scroll toward it. The core (physics, gate lifecycle, collision
and scoring, session state machine) is pure and driven by caller-supplied
timestamps; a pygame front-end and a Gymnasium environment sit on top.
"""

from .config import FlyerConfig, GateConfig, GameConfig, CONFIGS
from .geometry import Rect, FieldGeometry, GeometryProvider, FixedGeometry
from .physics import PhysicsWorld, PhysicsParams, clamp_frame_delta
from .entities import Flyer, Gate
from .gates import GateManager
from .collision import CollisionEvaluator, Evaluation, Outcome
from .session import Session, SessionState, Snapshot
from .storage import HighScoreStore, MemoryHighScoreStore, JsonHighScoreStore

__all__ = [
    "FlyerConfig",
    "GateConfig",
    "GameConfig",
    "CONFIGS",
    "Rect",
    "FieldGeometry",
    "GeometryProvider",
    "FixedGeometry",
    "PhysicsWorld",
    "PhysicsParams",
    "clamp_frame_delta",
    "Flyer",
    "Gate",
    "GateManager",
    "CollisionEvaluator",
    "Evaluation",
    "Outcome",
    "Session",
    "SessionState",
    "Snapshot",
    "HighScoreStore",
    "MemoryHighScoreStore",
    "JsonHighScoreStore",
]
