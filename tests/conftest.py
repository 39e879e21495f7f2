import os

os.environ["DSAVIZ_ENV"] = "test"

import pytest

from engine import ManualScheduler, PlaybackController, generate_trace
from settings import load_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Every test starts (and ends) with settings read from the current env."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def controller(scheduler):
    return PlaybackController(scheduler=scheduler, interval_ms=100)


@pytest.fixture
def bubble_trace():
    # 10 snapshots: init, 2 × (compare, swap), pass, compare, swap, pass, done
    return generate_trace("bubble_sort", [3, 2, 1])
