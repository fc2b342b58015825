"""
SkyDrop Test Suite — Shared Fixtures

Provides reusable pytest fixtures for all test stages.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from skydrop.clock import SkyDropSession
from skydrop.entities import Field, Flyer, Projectile, Target
from skydrop.scoring import Scoreboard
from sim_harness.envs.skydrop_env import SkyDropEnv


# ---------- Session Fixtures ----------
@pytest.fixture
def session():
    """Default 800×600 session, seeded."""
    return SkyDropSession(seed=42)


@pytest.fixture
def narrow_session():
    """Portrait phone-sized field: only two target slots fit."""
    return SkyDropSession(config={"field_width": 390, "field_height": 844}, seed=42)


@pytest.fixture
def env():
    """Default SkyDrop environment with a short episode limit."""
    env = SkyDropEnv(env_config={"max_ticks": 600})
    yield env
    env.close()


# ---------- Entity Fixtures ----------
@pytest.fixture
def field():
    return Field(800.0, 600.0)


@pytest.fixture
def flyer():
    """Flyer at the centre of an 800-wide field, patrolling right."""
    return Flyer(id="flyer", position=[400.0, 100.0], velocity=[120.0, 0.0])


@pytest.fixture
def target():
    """Unstruck target in the first slot of an 800×600 field."""
    return Target(id="target_0", position=[140.0, 520.0], slot_x=120.0)


@pytest.fixture
def make_projectile():
    """Factory for projectiles at a given position and velocity."""
    def _make(x, y, vx=0.0, vy=0.0, id="projectile_0"):
        return Projectile(id=id, position=[x, y], velocity=[vx, vy])
    return _make


@pytest.fixture
def scoreboard():
    return Scoreboard()


@pytest.fixture
def seeded_rng():
    """Seeded numpy RNG for determinism."""
    return np.random.default_rng(seed=42)
