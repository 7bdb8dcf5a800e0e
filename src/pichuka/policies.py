"""Scripted policies for driving PichukaEnv.

Each policy takes an observation and returns an action compatible with
PichukaEnv's Discrete(2) action space.
"""

from typing import Dict, Optional

import numpy as np

from .config import FlyerConfig, GameConfig
from .gym_env import ACTION_FLAP, ACTION_GLIDE


class BasePolicy:
    """Base class for scripted policies."""

    name: str = "base"

    def __call__(self, obs: Dict[str, np.ndarray]) -> int:
        return self.act(obs)

    def act(self, obs: Dict[str, np.ndarray]) -> int:
        raise NotImplementedError

    def reset(self):
        """Called at the start of each episode."""
        pass


class RandomPolicy(BasePolicy):
    """Flaps with a fixed probability each step.

    Short episodes, mostly ceiling and ground deaths. Good baseline.
    """

    name = "random"

    def __init__(self, flap_probability: float = 0.08, rng: Optional[np.random.Generator] = None):
        self.flap_probability = flap_probability
        self.rng = rng or np.random.default_rng()

    def act(self, obs):
        return ACTION_FLAP if self.rng.random() < self.flap_probability else ACTION_GLIDE


class GapFollowPolicy(BasePolicy):
    """Flaps when the flyer sinks below a target line inside the next gap.

    Only flaps while falling, so one impulse is not immediately cancelled
    by the next.
    """

    name = "gap_follow"

    def __init__(self, flyer_height: float = FlyerConfig.height, margin: float = 20.0):
        self.flyer_height = flyer_height
        self.margin = margin

    @classmethod
    def from_config(cls, config: GameConfig, margin: float = 20.0) -> "GapFollowPolicy":
        """Aim using the flyer size the environment was built with."""
        return cls(flyer_height=config.flyer.height, margin=margin)

    def act(self, obs):
        state = obs["state"]
        y, velocity = state[0], state[1]
        gap_bottom = state[4]

        target = gap_bottom - self.margin - self.flyer_height
        if y > target and velocity >= 0:
            return ACTION_FLAP
        return ACTION_GLIDE


POLICIES = {
    "random": RandomPolicy,
    "gap_follow": GapFollowPolicy,
}
