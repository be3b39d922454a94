"""
input.py — Raw input to Direction translation.

Keyboard keys map straight onto directions. Swipes (a touch finger or a
mouse drag) resolve along their dominant axis: a mostly-horizontal swipe
is LEFT/RIGHT, anything else is UP/DOWN.
"""

import math
from typing import Optional, Tuple

import pygame

from .config import SWIPE_MIN_DISTANCE
from .model import Direction

Point = Tuple[float, float]

KEY_DIRECTIONS = {
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP:    Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
    pygame.K_a:     Direction.LEFT,
    pygame.K_d:     Direction.RIGHT,
    pygame.K_w:     Direction.UP,
    pygame.K_s:     Direction.DOWN,
}


def key_direction(key: int) -> Optional[Direction]:
    return KEY_DIRECTIONS.get(key)


def swipe_direction(start: Point, end: Point,
                    min_distance: float = SWIPE_MIN_DISTANCE) -> Optional[Direction]:
    """Return the direction of the swipe from ``start`` to ``end``, or None if too short."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if math.hypot(dx, dy) < min_distance or (dx == 0 and dy == 0):
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class SwipeTracker:
    """Remembers where a press started and resolves the release into a Direction."""

    def __init__(self, min_distance: float = SWIPE_MIN_DISTANCE) -> None:
        self.min_distance = min_distance
        self._start: Optional[Point] = None

    @property
    def active(self) -> bool:
        return self._start is not None

    def press(self, pos: Point) -> None:
        self._start = (pos[0], pos[1])

    def release(self, pos: Point) -> Optional[Direction]:
        if self._start is None:
            return None
        start, self._start = self._start, None
        return swipe_direction(start, pos, self.min_distance)

    def cancel(self) -> None:
        self._start = None
