import random

import pytest

from tile_merge.env.grid import Grid
from tile_merge.env.tile import Tile


class StubRandom:
    """Predictable stand-in for ``random.Random``.

    ``random()`` always returns ``value`` and ``choice`` always picks the
    element at ``index`` (clamped to the sequence).
    """

    def __init__(self, value: float = 0.0, index: int = 0) -> None:
        self.value = value
        self.index = index
        self.choices = []

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        self.choices.append(list(seq))
        return seq[min(self.index, len(seq) - 1)]


def grid_from_rows(rows) -> Grid:
    """Build a grid from ``rows[y][x]`` values, ``0`` or ``None`` for empty."""
    grid = Grid.empty(len(rows))
    for y, row in enumerate(rows):
        for x, value in enumerate(row):
            if value:
                grid.insert_tile(Tile(x, y, value))
    return grid


@pytest.fixture
def make_grid():
    return grid_from_rows


@pytest.fixture
def stub_rng():
    return StubRandom()


@pytest.fixture
def seeded_rng():
    return random.Random(1234)
