"""Pytest configuration and shared fixtures."""

import os
import random

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'

import pytest

from pichuka.config import GameConfig
from pichuka.geometry import FieldGeometry, FixedGeometry
from pichuka.physics import PhysicsWorld
from pichuka.session import Session
from pichuka.storage import MemoryHighScoreStore


@pytest.fixture
def physics():
    """Fresh physics world for each test."""
    return PhysicsWorld()


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def field():
    """500px tall field with a 50px ground strip and a 38x28 flyer."""
    geometry = FieldGeometry(
        width=400, height=500, ground_height=50, flyer_width=38, flyer_height=28,
    )
    assert geometry.fits_gates(gap=170, min_height=70)
    return geometry


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def session(field, store):
    """Session over the 500px field with seeded gate heights."""
    return Session(
        GameConfig(),
        geometry=FixedGeometry(field),
        store=store,
        rng=random.Random(1234),
    )
