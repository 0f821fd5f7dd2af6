import os

# Headless pygame for the front-end tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import random

import pytest

from invaders import GameConfig, InputState, Session


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def session(config, rng):
    return Session(config, rng)


@pytest.fixture
def playing(session):
    session.advance(0.0, 0.0, InputState(confirm=True))
    return session


@pytest.fixture
def freeze():
    """Stamp the swarm timers so it neither marches nor fires at `now`."""
    def _freeze(session, now):
        session.swarm.last_move_time = now
        session.swarm.last_shot_time = now
    return _freeze
