"""
Shared fixtures. pygame runs headless under SDL's dummy drivers.
"""

import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from gridsnake.model import EngineConfig, GameEngine
from gridsnake.storage import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def engine(store):
    """A seeded engine on the default 20x20 grid with no obstacles."""
    return GameEngine(EngineConfig(obstacle_count=0, seed=7), store=store, rng=random.Random())
