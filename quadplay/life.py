"""Conway's Game of Life on a bounded (non-wrapping) grid."""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Sequence


class CellState(Enum):
    """State of a single cell."""

    ALIVE = "alive"
    DEAD = "dead"


Grid = list[list[CellState]]


def random_grid(width: int, height: int, rng: Optional[random.Random] = None) -> Grid:
    """A grid of `height` rows by `width` columns; each cell is alive with chance 1 in 5."""
    if width < 0 or height < 0:
        raise ValueError("grid dimensions must not be negative")
    rng = rng if rng is not None else random.Random()
    return [
        [CellState.ALIVE if rng.randrange(5) == 0 else CellState.DEAD for _ in range(width)]
        for _ in range(height)
    ]


def _live_neighbours(cells: Sequence[Sequence[CellState]], x: int, y: int) -> int:
    height = len(cells)
    width = len(cells[0])
    return sum(
        cells[ny][nx] is CellState.ALIVE
        for ny in range(max(y - 1, 0), min(y + 2, height))
        for nx in range(max(x - 1, 0), min(x + 2, width))
        if (nx, ny) != (x, y)
    )


def _next_state(cell: CellState, neighbours: int) -> CellState:
    if cell is CellState.ALIVE:
        return CellState.ALIVE if neighbours in (2, 3) else CellState.DEAD
    return CellState.ALIVE if neighbours == 3 else CellState.DEAD


def next_generation(cells: Sequence[Sequence[CellState]]) -> Grid:
    """Apply one step of the Life rules; cells beyond the edge count as dead.

    Raises ValueError if the rows are not all the same length.
    """
    if not cells:
        return []
    width = len(cells[0])
    if any(len(row) != width for row in cells):
        raise ValueError("all rows must have the same length")
    return [
        [_next_state(cell, _live_neighbours(cells, x, y)) for x, cell in enumerate(row)]
        for y, row in enumerate(cells)
    ]