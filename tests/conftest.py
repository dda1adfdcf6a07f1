import random

import pytest

from snake_roguelite.game import Game
from snake_roguelite.models import Direction, Session
from snake_roguelite.progression import default_progression
from snake_roguelite.storage import MemoryStore


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def progression():
    return default_progression()


@pytest.fixture
def make_session():
    def _make(snake=None, direction=Direction.RIGHT, food=(15, 15), enemies=None, **kwargs):
        return Session(
            snake=list(snake or [(5, 5), (4, 5), (3, 5)]),
            direction=direction,
            next_direction=direction,
            food=food,
            enemies=list(enemies or []),
            **kwargs,
        )
    return _make


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def game(store):
    return Game(store, rng=random.Random(7))
