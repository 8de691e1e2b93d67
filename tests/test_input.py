"""
Tests for the keyboard and swipe mapping.
"""

import pytest

from merge2048.controls import key_direction, swipe_direction
from merge2048.core.models import Direction


class TestKeys:
    """Tests for arrow key mapping."""

    @pytest.mark.parametrize(
        'key, direction',
        [('up', Direction.UP), ('down', Direction.DOWN), ('left', Direction.LEFT), ('right', Direction.RIGHT)],
    )
    def test_arrows(self, key, direction):
        assert key_direction(key) is direction

    @pytest.mark.parametrize('key', ['a', 'ctrl+left', '', None])
    def test_other_keys(self, key):
        assert key_direction(key) is None


class TestSwipe:
    """Tests for swipe thresholding."""

    @pytest.mark.parametrize(
        'd_x, d_y, direction',
        [
            (25, 10, Direction.RIGHT),
            (-25, 10, Direction.LEFT),
            (10, 30, Direction.DOWN),
            (-10, -30, Direction.UP),
            (40, -39, Direction.RIGHT),
        ],
    )
    def test_larger_axis_wins(self, d_x, d_y, direction):
        assert swipe_direction(d_x, d_y) is direction

    @pytest.mark.parametrize('d_x, d_y', [(0, 0), (15, -5), (20, 20), (-20, 0)])
    def test_short_drags_are_ignored(self, d_x, d_y):
        """Displacements up to the threshold are not swipes."""
        assert swipe_direction(d_x, d_y) is None

    def test_custom_threshold(self):
        assert swipe_direction(30, 0, threshold=50) is None
        assert swipe_direction(60, 0, threshold=50) is Direction.RIGHT
