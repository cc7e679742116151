"""Shared fixtures for the simulation tests."""

import pytest

from neon_swarm.audio import RecordingAudio
from neon_swarm.game import Game
from neon_swarm.player import create_player
from neon_swarm.world import World

WIDTH = 800
HEIGHT = 600


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def world(audio):
    """Empty 800x600 world recording its audio cues."""
    return World(WIDTH, HEIGHT, audio)


@pytest.fixture
def player(world):
    """Player at the center, pointer resting on it."""
    p = create_player(world, WIDTH / 2, HEIGHT / 2)
    world.set_pointer(p.x, p.y)
    return p


@pytest.fixture
def game(audio):
    return Game(WIDTH, HEIGHT, audio)


@pytest.fixture
def started_game(game):
    game.start_game()
    return game
