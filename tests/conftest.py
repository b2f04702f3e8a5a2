import os

# No window or audio device during tests
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

from settings import Settings
from simulation import Simulation


class CueRecorder:
    def __init__(self):
        self.kinds = []

    def __call__(self, kind):
        self.kinds.append(kind)


@pytest.fixture
def settings():
    return Settings(seed=1234)


@pytest.fixture
def cues():
    return CueRecorder()


@pytest.fixture
def free_sim(cues):
    """Always-running game: physics active from the first tick"""
    return Simulation(Settings(gated=False, seed=1234), play_cue=cues)


@pytest.fixture
def gated_sim(settings, cues):
    return Simulation(settings, play_cue=cues)

