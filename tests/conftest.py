"""
Shared fixtures for the torus maze test suite.
"""

import random
from typing import Callable, Sequence

import pytest

from mazegen import Maze


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so generated mazes are reproducible."""
    return random.Random(0xE3D685FB)


@pytest.fixture
def open_maze() -> Callable[[Sequence[int]], Maze]:
    """Factory for a maze with every wall opened."""

    def _make(dimensions: Sequence[int]) -> Maze:
        maze = Maze(dimensions)
        maze.walls = [False] * len(maze.walls)
        return maze

    return _make
