"""Pytest fixtures for the dispatch core."""

import pytest

from config import SEED_DRONES, Timings
from dispatch.engine import DispatchEngine
from dispatch.registry import DroneRegistry
from dispatch.scheduling import SimulatedScheduler


@pytest.fixture
def scheduler():
    return SimulatedScheduler()


@pytest.fixture
def registry():
    return DroneRegistry(SEED_DRONES)


@pytest.fixture
def engine(registry, scheduler):
    """Engine over the three seed drones, all available, on simulated time."""
    eng = DispatchEngine(registry=registry, scheduler=scheduler, timings=Timings())
    yield eng
    eng.reset()


@pytest.fixture
def single_drone_engine(scheduler):
    return DispatchEngine(registry=DroneRegistry([(1, "Solo")]), scheduler=scheduler)
