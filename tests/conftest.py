"""Shared pytest fixtures for cavegen tests."""

import random

import pytest

from cave_engine import CaveGrid


class FixedSequence:
    """Random source that replays a fixed list of values, cycling."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        v = self.values[self.calls % len(self.values)]
        self.calls += 1
        return v


@pytest.fixture
def ring_grid() -> CaveGrid:
    """3x3 grid of walls with an open center."""
    return CaveGrid.from_rows([
        [1, 1, 1],
        [1, 0, 1],
        [1, 1, 1],
    ])


@pytest.fixture
def noisy_grid() -> CaveGrid:
    """A 12x9 grid filled from a seeded stdlib generator."""
    rng = random.Random(1234)
    return CaveGrid(12, 9, (1 if rng.random() < 0.45 else 0 for _ in range(12 * 9)))


@pytest.fixture
def fixed_sequence():
    """Factory for FixedSequence random sources."""
    return FixedSequence
