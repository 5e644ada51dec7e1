"""Shared fixtures for the last stand test suite."""

import random

import pytest

from src.last_stand.evaluator import LastStandEvaluator
from src.last_stand.round_state import RoundStateStore
from src.last_stand.simulation import SimulatedHost
from tests.helpers import make_candidate_config


@pytest.fixture
def host():
    """Single-player host, 100 goal over 2 extraction points, 60 in level."""
    return SimulatedHost(
        haul_goal=100,
        extraction_point_count=2,
        extraction_points_completed=1,
        collectibles=[10.0, 11.0, 39.0],
    )


@pytest.fixture
def store():
    state = RoundStateStore()
    state.initialize(make_candidate_config(("Handgun", 1.0), ("Sword", 3.0)))
    return state


@pytest.fixture
def evaluator(store, host):
    """Evaluator wired to the simulated host's destruction events."""
    evaluator = LastStandEvaluator(
        state=store,
        metrics_provider=host,
        session=host,
        player=host,
        spawner=host,
        presentation=host,
        rng=random.Random(42),
    )
    host.on_destroy = evaluator.handle_collectible_destroyed
    return evaluator
