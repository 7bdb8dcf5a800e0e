"""Gymnasium environment wrapper for PICHUKA.

Provides standard Gym API for agents and scripted policies. The environment
is its own clock: every step advances a synthetic timestamp by one frame at
``config.fps``, so episodes are reproducible given a seed.
"""

import random
from typing import Optional, Dict, Tuple

import gymnasium
import numpy as np
import pygame
from gymnasium import spaces

from .config import GameConfig
from .entities import Gate
from .geometry import FixedGeometry
from .renderer import draw_world, draw_hud
from .session import Session, SessionState
from .storage import MemoryHighScoreStore


STATE_SIZE = 8

ACTION_GLIDE = 0
ACTION_FLAP = 1


class PichukaEnv(gymnasium.Env):
    """Gymnasium wrapper for the game.

    Observation space (Dict):
        'rgb': uint8 array of shape (H, W, 3) - rendered frame (zeros unless
               render_mode is set)
        'state': float32 array of shape (8,) containing:
            [0] flyer y (top of collision box)
            [1] flyer velocity (px/frame, positive = falling)
            [2] horizontal distance from flyer front to the next gate
            [3] next gate gap top
            [4] next gate gap bottom
            [5] score
            [6] ground line y
            [7] game over (0/1)

    Action space: Discrete(2) - 0 = glide, 1 = flap.

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        gate:  gates passed this step
        alive: 1.0 every step survived
        death: 1.0 on collision
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        obs_resolution: Tuple[int, int] = (120, 80),
        max_episode_steps: int = 3000,
        reward_weights: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.obs_height, self.obs_width = obs_resolution
        self.max_episode_steps = max_episode_steps

        self.reward_weights = reward_weights or {
            "gate": 1.0,
            "alive": 0.01,
            "death": -1.0,
        }

        self.action_space = spaces.Discrete(2)
        self.observation_space = spaces.Dict({
            "rgb": spaces.Box(
                low=0, high=255,
                shape=(self.obs_height, self.obs_width, 3),
                dtype=np.uint8,
            ),
            "state": spaces.Box(
                low=-np.inf, high=np.inf,
                shape=(STATE_SIZE,),
                dtype=np.float32,
            ),
        })

        # Initialize pygame (caller sets SDL_VIDEODRIVER for headless)
        if not pygame.get_init():
            pygame.init()

        self._surface = pygame.Surface(
            (self.config.screen_width, self.config.screen_height)
        )
        self._display = None
        if render_mode == "human":
            self._display = pygame.display.set_mode(
                (self.config.screen_width, self.config.screen_height)
            )
            pygame.display.set_caption("PichukaEnv")

        # High score survives across episodes of one env
        self._store = MemoryHighScoreStore()
        self._geometry = FixedGeometry.from_config(self.config)
        self._session: Optional[Session] = None
        self._episode_steps = 0
        self._now = 0.0
        self._frame_ms = 1000.0 / self.config.fps
        self._gate_seed: int = 0

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        self._gate_seed = int(self.np_random.integers(0, 2**31))
        self._session = Session(
            self.config,
            geometry=self._geometry,
            store=self._store,
            rng=random.Random(self._gate_seed),
        )
        self._session.activate()
        self._episode_steps = 0
        self._now = 0.0

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self._session is not None, "Must call reset() before step()"

        if self._session.wants_frame and int(action) == ACTION_FLAP:
            self._session.activate()

        evaluation = self._session.update(self._now)
        self._now += self._frame_ms
        self._episode_steps += 1

        reward_signals = {
            "gate": float(evaluation.scored) if evaluation else 0.0,
            "alive": 1.0 if self._session.wants_frame else 0.0,
            "death": 1.0 if evaluation is not None and evaluation.collided else 0.0,
        }
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        terminated = self._session.state is SessionState.GAME_OVER
        truncated = self._episode_steps >= self.max_episode_steps

        obs = self._get_obs()
        info = self._get_info()
        info["reward_signals"] = reward_signals

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    def _next_gate(self) -> Optional[Gate]:
        for gate in self._session.gates:
            if not gate.scored:
                return gate
        return None

    def _get_state_vector(self):
        state = np.zeros(STATE_SIZE, dtype=np.float32)
        session = self._session
        field = session.geometry.measure()
        flyer_front = session.flyer.x + field.flyer_width

        state[0] = session.flyer.y
        state[1] = session.flyer.velocity

        gate = self._next_gate()
        if gate is not None:
            state[2] = gate.x - flyer_front
            state[3] = gate.top_height
            state[4] = gate.bottom_y
        else:
            # No gate yet: an open field reaching to the right edge
            state[2] = field.width - flyer_front
            state[3] = 0.0
            state[4] = field.ground_y

        state[5] = float(session.score)
        state[6] = field.ground_y
        state[7] = float(session.state is SessionState.GAME_OVER)
        return state

    def _get_obs(self):
        if self.render_mode in ("rgb_array", "human"):
            rgb = self._render_frame()
        else:
            rgb = np.zeros(
                (self.obs_height, self.obs_width, 3), dtype=np.uint8
            )
        return {"rgb": rgb, "state": self._get_state_vector()}

    def _get_info(self):
        session = self._session
        return {
            "score": session.score,
            "high_score": session.high_score,
            "episode_steps": self._episode_steps,
            "game_over": session.state is SessionState.GAME_OVER,
            "death_cause": session.death_cause,
            "gates": len(session.gates),
            "gate_seed": self._gate_seed,
        }

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_frame(self):
        """Render current state to numpy array (H, W, 3) uint8."""
        draw_world(self._surface, self._session.snapshot())
        scaled = pygame.transform.scale(
            self._surface, (self.obs_width, self.obs_height)
        )
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(scaled)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def render(self):
        if self.render_mode == "rgb_array":
            return self._render_frame()
        elif self.render_mode == "human" and self._display:
            snapshot = self._session.snapshot()
            draw_world(self._display, snapshot)
            draw_hud(self._display, snapshot)
            pygame.display.flip()

    def close(self):
        if self._display:
            pygame.display.quit()
            self._display = None
