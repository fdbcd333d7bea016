"""Grid snake game state, advanced one tick at a time."""

from __future__ import annotations

import random
from collections import deque
from enum import Enum
from typing import Optional

Point = tuple[int, int]

SQUARES = 16
INITIAL_SPEED = 0.3


class Direction(Enum):
    """Movement directions as (dx, dy) steps; y grows downwards."""

    UP = (0, -1)
    DOWN = (0, 1)
    RIGHT = (1, 0)
    LEFT = (-1, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))


class SnakeGame:
    """Snake on a square board; eating fruit scores points and speeds up play."""

    def __init__(self, squares: int = SQUARES, rng: Optional[random.Random] = None) -> None:
        if squares <= 0:
            raise ValueError("board size must be positive")
        self.squares = squares
        self._rng = rng if rng is not None else random.Random()
        self.restart()

    def _random_point(self) -> Point:
        return (self._rng.randrange(self.squares), self._rng.randrange(self.squares))

    def restart(self) -> None:
        """Reset to a fresh game."""
        self.head: Point = (0, 0)
        self.direction = Direction.RIGHT
        self.body: deque[Point] = deque()
        self.fruit: Point = self._random_point()
        self.score = 0
        self.speed = INITIAL_SPEED
        self.navigation_lock = False
        self.game_over = False

    def steer(self, direction: Direction) -> bool:
        """Turn the snake; reversing and a second turn before the next tick are ignored.

        Returns True if the turn was taken.
        """
        if self.game_over or self.navigation_lock or direction is self.direction.opposite:
            return False
        self.direction = direction
        self.navigation_lock = True
        return True

    def tick(self) -> None:
        """Move the snake one square, eating fruit and detecting collisions."""
        if self.game_over:
            return
        self.body.appendleft(self.head)
        dx, dy = self.direction.value
        self.head = (self.head[0] + dx, self.head[1] + dy)
        if self.head == self.fruit:
            self.fruit = self._random_point()
            self.score += 100
            self.speed *= 0.9
        else:
            self.body.pop()

        x, y = self.head
        if not (0 <= x < self.squares and 0 <= y < self.squares):
            self.game_over = True
        if self.head in self.body:
            self.game_over = True
        self.navigation_lock = False