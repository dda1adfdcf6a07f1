"""Grid geometry and occupancy helpers."""

import random
from typing import Iterable, Optional

from .constants import GRID_SIZE

Position = tuple[int, int]


def in_bounds(pos: Position) -> bool:
    x, y = pos
    return 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE


def clamp(pos: Position) -> Position:
    x, y = pos
    return min(max(x, 0), GRID_SIZE - 1), min(max(y, 0), GRID_SIZE - 1)


def step(pos: Position, vector: tuple[int, int]) -> Position:
    return pos[0] + vector[0], pos[1] + vector[1]


def free_cells(occupied: Iterable[Position]) -> list[Position]:
    blocked = set(occupied)
    return [
        (x, y)
        for y in range(GRID_SIZE)
        for x in range(GRID_SIZE)
        if (x, y) not in blocked
    ]


def random_empty_position(rng: random.Random, occupied: Iterable[Position]) -> Optional[Position]:
    """Pick a uniformly random cell outside ``occupied``.

    Returns None when every cell is taken.
    """
    cells = free_cells(occupied)
    if not cells:
        return None
    return rng.choice(cells)
