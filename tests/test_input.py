"""
Tests for input.py - keys and swipes to directions.
"""

import pygame
import pytest

from gridsnake.input import SwipeTracker, key_direction, swipe_direction
from gridsnake.model import Direction


class TestKeys:

    @pytest.mark.parametrize("key, expected", [
        (pygame.K_UP, Direction.UP),
        (pygame.K_DOWN, Direction.DOWN),
        (pygame.K_LEFT, Direction.LEFT),
        (pygame.K_RIGHT, Direction.RIGHT),
        (pygame.K_w, Direction.UP),
        (pygame.K_a, Direction.LEFT),
    ])
    def test_direction_keys(self, key, expected):
        assert key_direction(key) == expected

    def test_other_keys_map_to_nothing(self):
        assert key_direction(pygame.K_p) is None


class TestSwipe:

    @pytest.mark.parametrize("end, expected", [
        ((150, 110), Direction.RIGHT),
        ((50, 90), Direction.LEFT),
        ((110, 160), Direction.DOWN),
        ((95, 40), Direction.UP),
    ])
    def test_dominant_axis_wins(self, end, expected):
        assert swipe_direction((100, 100), end) == expected

    def test_diagonal_tie_is_vertical(self):
        assert swipe_direction((0, 0), (30, 30)) == Direction.DOWN
        assert swipe_direction((0, 0), (-30, -30)) == Direction.UP

    def test_short_swipe_is_ignored(self):
        assert swipe_direction((100, 100), (104, 103)) is None
        assert swipe_direction((100, 100), (100, 100), min_distance=0) is None

    def test_tracker_resolves_press_and_release(self):
        tracker = SwipeTracker()
        assert tracker.release((10, 10)) is None
        tracker.press((10, 10))
        assert tracker.active
        assert tracker.release((80, 20)) == Direction.RIGHT
        assert not tracker.active

    def test_tracker_cancel(self):
        tracker = SwipeTracker()
        tracker.press((10, 10))
        tracker.cancel()
        assert tracker.release((80, 20)) is None
