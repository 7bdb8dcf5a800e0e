"""Interactive game engine: pygame window, input and frame driver.

Coordinates a Session with pygame rendering into a playable game. The engine
is the session's clock: it feeds ``pygame.time.get_ticks()`` to
``Session.update`` while the session wants frames.
"""

import logging
from typing import Optional

import pygame

from .config import GameConfig
from .geometry import FieldGeometry, GeometryProvider
from .renderer import draw_frame
from .session import Session, SessionState
from .storage import HighScoreStore, JsonHighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


class SurfaceGeometry(GeometryProvider):
    """Measures the play field from the current display surface."""

    def __init__(self, config: GameConfig):
        self.config = config

    def measure(self) -> FieldGeometry:
        surface = pygame.display.get_surface()
        if surface is None:
            width, height = self.config.screen_width, self.config.screen_height
        else:
            width, height = surface.get_size()
        return FieldGeometry(
            width=width,
            height=height,
            ground_height=self.config.ground_height,
            flyer_width=self.config.flyer.width,
            flyer_height=self.config.flyer.height,
        )


class PichukaEngine:
    """Main game engine coordinating all systems.

    Handles:
    - Frame driving with real timestamps
    - Pygame rendering
    - Keyboard / mouse / touch input, reduced to ``Session.activate``
    - Window resizing
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[HighScoreStore] = None,
    ):
        """Initialize game engine.

        Args:
            config: Game configuration. Uses defaults if None.
            store: High score persistence. Defaults to a JSON file at
                ``config.high_score_path`` (memory only if that is None).
        """
        self.config = config or GameConfig()

        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.screen_width, self.config.screen_height),
            pygame.RESIZABLE,
        )
        pygame.display.set_caption("PICHUKA")
        self.clock = pygame.time.Clock()

        if store is None:
            if self.config.high_score_path:
                store = JsonHighScoreStore(self.config.high_score_path)
            else:
                store = MemoryHighScoreStore()
        self.store = store

        self.session = Session(
            self.config,
            geometry=SurfaceGeometry(self.config),
            store=self.store,
        )
        self.running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        """Process one pygame event."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_SPACE:
                self.session.activate()
        elif event.type == pygame.MOUSEBUTTONDOWN:
            # Touches also arrive as FINGERDOWN; skip their mouse echo
            if not getattr(event, "touch", False):
                self.session.activate()
        elif event.type == pygame.FINGERDOWN:
            self.session.activate()
        elif event.type == pygame.VIDEORESIZE:
            self.handle_resize()

    def handle_events(self) -> None:
        """Process pending pygame events."""
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_resize(self) -> None:
        """Re-centre the flyer when the window changes size between sessions."""
        if self.session.state is not SessionState.PLAYING:
            self.session.recenter_flyer()

    def update(self, now: Optional[float] = None) -> None:
        """Run one session cycle if the session wants one.

        Args:
            now: Timestamp in ms. Defaults to pygame's tick counter.
        """
        if not self.session.wants_frame:
            return
        if now is None:
            now = pygame.time.get_ticks()
        self.session.update(now)

    def render(self) -> None:
        """Render current game state."""
        draw_frame(self.screen, self.session.snapshot())
        pygame.display.flip()

    def run(self) -> None:
        """Main game loop."""
        self.running = True
        logger.info("Starting PICHUKA (high score %d)", self.session.high_score)

        while self.running:
            self.handle_events()
            self.update()
            self.render()
            self.clock.tick(self.config.fps)

        self.store.close()
        pygame.quit()
