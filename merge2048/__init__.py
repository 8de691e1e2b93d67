# -*- coding: utf-8 -*-
"""
2048 sliding-tile puzzle.

The `GridEngine` resolves moves and spawns tiles, the `MoveAnimator` replays each move as a slide
followed by a merge pop, and `Game2048` ties both to a renderer and to player input.
"""

from .animation import AnimationPhase, MoveAnimator
from .config import AnimationConfig, GameConfig, default_config
from .core import Difficulty, DifficultyProfile, Direction, GridEngine, MoveEvent, MoveResult, Position
from .game import Game2048

__all__ = [
    "AnimationConfig",
    "AnimationPhase",
    "Difficulty",
    "DifficultyProfile",
    "Direction",
    "Game2048",
    "GameConfig",
    "GridEngine",
    "MoveAnimator",
    "MoveEvent",
    "MoveResult",
    "Position",
    "default_config",
]
