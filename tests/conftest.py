import os
from unittest.mock import MagicMock

# Headless pygame for every test module
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from snakegame.config import Config  # noqa: E402
from snakegame.game import GameEngine  # noqa: E402
from snakegame.scheduler import ManualScheduler  # noqa: E402


@pytest.fixture(scope="session")
def pygame_init():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def store():
    """Store double that records writes; starts with no high score."""
    mock_store = MagicMock()
    mock_store.get.return_value = 0
    return mock_store


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def config():
    return Config(seed=1234, persist_in_background=False)


@pytest.fixture
def engine(store, scheduler, config):
    eng = GameEngine(store, scheduler, config)
    yield eng
    eng.close()


@pytest.fixture
def started(engine):
    """Engine right after start(), with food parked out of the snake's way."""
    engine.start()
    engine.state.food = (0, 0)
    return engine
