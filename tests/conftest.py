import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from tetris_board import Grid
from tetris_config import load_settings
from tetris_piece import TEMPLATES
from tetris_shape import Color


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class ScriptedSelector:
    """Hands out the given shapes in order, then repeats the last one."""
    def __init__(self, *shapes):
        self.shapes = list(shapes)
        self.handed = 0

    def next_template(self):
        i = min(self.handed, len(self.shapes) - 1)
        self.handed += 1
        return self.shapes[i]


def grid_from(*lines, color=Color.RED):
    """Build a Grid from strings, '.' empty and anything else occupied."""
    rows = tuple(tuple(None if ch == "." else color for ch in line) for line in lines)
    return Grid(len(lines[0]), len(lines), rows)


@pytest.fixture
def clock():
    return FakeClock(1000)


@pytest.fixture
def settings():
    return load_settings({"BOARD_WIDTH": 8, "BOARD_HEIGHT": 20})


@pytest.fixture
def o_piece():
    return TEMPLATES["O"]

