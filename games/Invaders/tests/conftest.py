"""Shared fixtures for Invaders tests."""

import os
import random

# Headless pygame for every test in this directory
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

from models import InvadersInternalState
from games.Invaders.config import InvadersSettings
from games.Invaders.game_mode import InvadersMode
from games.Invaders.game.sinks import RecordingRenderSink, RecordingSoundSink, RecordingUISink


class SilentRandom(random.Random):
    """Random source pinned to the top of [0, 1).

    Every spawn timer needs its full base + jitter before firing, so
    short tests see no random spawns.
    """

    def random(self):
        return 0.999999


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def silent_rng():
    return SilentRandom()


@pytest.fixture
def sinks():
    return {
        'render': RecordingRenderSink(),
        'sound': RecordingSoundSink(),
        'ui': RecordingUISink(),
    }


@pytest.fixture
def make_game(sinks):
    """Factory for games wired to the recording sinks."""
    def _make(settings=None, rng=None, start=True, **overrides) -> InvadersMode:
        if settings is None:
            settings = InvadersSettings(**overrides)
        game = InvadersMode(
            settings=settings,
            render_sink=sinks['render'],
            sound_sink=sinks['sound'],
            ui_sink=sinks['ui'],
            rng=rng or SilentRandom(),
        )
        if start:
            game.start()
            assert game.internal_state == InvadersInternalState.PLAYING
        return game
    return _make


@pytest.fixture
def game(make_game):
    """Started game with recording sinks and no random spawns."""
    return make_game()


@pytest.fixture
def empty_game(game):
    """Started game with the invader wave removed."""
    game.wave.invaders = []
    return game
