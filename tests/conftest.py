import os
import sys
import pytest

# headless SDL before pygame is imported anywhere
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Ensure the project root (containing the `catchball` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pygame

from catchball.physics import GameConfig, InputState, new_game
from catchball.scores import MemoryStore


@pytest.fixture()
def pg():
    pygame.init()
    yield pygame
    pygame.quit()


@pytest.fixture()
def config():
    return GameConfig()


@pytest.fixture()
def state(config):
    return new_game(config)


@pytest.fixture()
def inputs():
    return InputState()


@pytest.fixture()
def store():
    return MemoryStore()
