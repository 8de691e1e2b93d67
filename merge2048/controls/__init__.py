# -*- coding: utf-8 -*-
"""
Input mapping: arrow keys and swipes to move directions.
"""

from .input import KEY_DIRECTIONS, key_direction, swipe_direction

__all__ = ["KEY_DIRECTIONS", "key_direction", "swipe_direction"]
