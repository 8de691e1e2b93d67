# -*- coding: utf-8 -*-
"""
This module provides the colour themes and the Matplotlib window used to play the game.

`WindowBoard` is imported from `merge2048.utils.windows` directly, so that the themes can be used
without loading Matplotlib.
"""

from .themes import THEMES, Theme, get_theme, luminance

__all__ = ["THEMES", "Theme", "get_theme", "luminance"]
