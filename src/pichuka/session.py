"""Session state machine tying physics, gates and scoring together.

States: START -> PLAYING -> GAME_OVER -> PLAYING -> ...

The session never schedules itself. A driver calls ``update(now)`` once per
frame for as long as ``wants_frame`` is true, passing a monotonic timestamp
in milliseconds; ``activate()`` is the only input.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .collision import CollisionEvaluator, Evaluation
from .config import GameConfig
from .entities import Flyer
from .gates import GateManager
from .geometry import FieldGeometry, FixedGeometry, GeometryProvider
from .physics import PhysicsWorld, PhysicsParams, clamp_frame_delta
from .storage import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


START_MESSAGE = "PICHUKA - Press Space to Start"
GAME_OVER_MESSAGE = "Game Over - PICHUKA\nScore: {score}\nHigh Score: {high_score}\nPress Space to Restart"


class SessionState(Enum):
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "gameover"


@dataclass
class GateView:
    """Render-side view of a gate."""
    x: float
    width: float
    top_height: float
    bottom_y: float
    bottom_height: float


@dataclass
class Snapshot:
    """Everything a renderer needs after a cycle."""
    state: SessionState
    field: FieldGeometry
    flyer_x: float
    flyer_y: float
    flyer_velocity: float
    flyer_rotation: float
    score: int
    high_score: int
    message: str
    gates: List[GateView] = field(default_factory=list)

    @property
    def scoreboard(self) -> str:
        return f"Score: {self.score} | High: {self.high_score}"


class Session:
    """One game instance: flyer, gates, score and high score.

    Usage:
        session = Session(config, store=JsonHighScoreStore(path))
        session.activate()                  # start (and first jump)
        while session.wants_frame:
            session.update(clock_ms())
        session.activate()                  # restart after game over
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        geometry: Optional[GeometryProvider] = None,
        store: Optional[HighScoreStore] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            config: Game configuration. Uses defaults if None.
            geometry: Field geometry source, queried every frame.
                Defaults to the config's screen size.
            store: High score persistence. Defaults to in-memory.
            rng: Random source for gate heights.
        """
        self.config = config or GameConfig()
        self.geometry = geometry or FixedGeometry.from_config(self.config)
        self.store = store or MemoryHighScoreStore()

        self.physics = PhysicsWorld(PhysicsParams(gravity=self.config.flyer.gravity))
        self.flyer = Flyer(self.physics, config=self.config.flyer)
        self.gate_manager = GateManager(self.config.gates, rng=rng)
        self.evaluator = CollisionEvaluator()

        self.state = SessionState.START
        self.score = 0
        self.high_score = self.store.load_high_score()
        self.last_frame_time: Optional[float] = None
        self.last_evaluation: Optional[Evaluation] = None
        self.death_cause: Optional[str] = None

        self.recenter_flyer()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def wants_frame(self) -> bool:
        """Whether the driver should run another update cycle."""
        return self.state is SessionState.PLAYING

    @property
    def gates(self):
        return self.gate_manager.gates

    @property
    def last_spawn_time(self) -> Optional[float]:
        return self.gate_manager.last_spawn_time

    @property
    def message(self) -> str:
        if self.state is SessionState.START:
            return START_MESSAGE
        if self.state is SessionState.GAME_OVER:
            return GAME_OVER_MESSAGE.format(score=self.score, high_score=self.high_score)
        return ""

    def snapshot(self) -> Snapshot:
        """Current state for the render sink."""
        return Snapshot(
            state=self.state,
            field=self.geometry.measure(),
            flyer_x=self.flyer.x,
            flyer_y=self.flyer.y,
            flyer_velocity=self.flyer.velocity,
            flyer_rotation=self.flyer.rotation_hint,
            score=self.score,
            high_score=self.high_score,
            message=self.message,
            gates=[
                GateView(g.x, g.width, g.top_height, g.bottom_y, g.bottom_height)
                for g in self.gates
            ],
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def activate(self) -> None:
        """Handle the single input signal.

        Starts a session from START or GAME_OVER (the press doubles as the
        first jump); while PLAYING it is a jump.
        """
        if self.state is SessionState.PLAYING:
            self.flyer.apply_impulse()
            return

        self._reset()
        self.state = SessionState.PLAYING
        self.flyer.apply_impulse()
        logger.info("Session started (high score %d)", self.high_score)

    def recenter_flyer(self) -> bool:
        """Put the flyer at the vertical centre of the playable field.

        Ignored while PLAYING; returns whether the flyer moved.
        """
        if self.state is SessionState.PLAYING:
            return False
        field = self.geometry.measure()
        self.flyer.reset((field.available_height - field.flyer_height) / 2)
        return True

    def _reset(self) -> None:
        self.score = 0
        self.last_frame_time = None
        self.last_evaluation = None
        self.death_cause = None
        self.gate_manager.clear()
        field = self.geometry.measure()
        self.flyer.reset((field.available_height - field.flyer_height) / 2)

    def _end(self, cause: Optional[str]) -> None:
        self.state = SessionState.GAME_OVER
        self.death_cause = cause
        logger.info("Game over (%s): score %d, high score %d", cause, self.score, self.high_score)

    def _add_score(self, points: int) -> None:
        self.score += points
        if self.score > self.high_score:
            self.high_score = self.score
            logger.info("New high score: %d", self.high_score)
            self.store.save_high_score(self.high_score)

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------

    def update(self, now: float) -> Optional[Evaluation]:
        """Run one cycle at timestamp ``now`` (ms).

        Returns:
            The frame's evaluation, or None when not PLAYING.
        """
        if self.state is not SessionState.PLAYING:
            return None

        if self.last_frame_time is None:
            self.last_frame_time = now
        dt = clamp_frame_delta((now - self.last_frame_time) / 1000.0)
        self.last_frame_time = now

        field = self.geometry.measure()

        self.flyer.integrate(dt)

        self.gate_manager.maybe_spawn(now, field)
        self.gate_manager.advance(dt)
        self.gate_manager.evict()

        evaluation = self.evaluator.evaluate(
            self.flyer.bounds(field.flyer_width, field.flyer_height),
            field.bounds,
            self.gates,
        )
        if evaluation.scored:
            self._add_score(evaluation.scored)
        if evaluation.collided:
            self._end(evaluation.cause)

        self.last_evaluation = evaluation
        logger.debug("Frame dt=%.4f y=%.1f v=%.2f gates=%d",
                     dt, self.flyer.y, self.flyer.velocity, len(self.gate_manager))
        return evaluation
