# -*- coding: utf-8 -*-
"""
This module provides the game logic of 2048.

It includes the grid engine (moves, merges, scoring, tile spawning, terminal detection), the
difficulty profiles, vectorised checks of the legal moves, and the persistence of settings.
"""

from .difficulty import Difficulty, DifficultyProfile
from .engine import GridEngine
from .gamemove import has_possible_moves, legal_directions, legal_directions_mask
from .models import Direction, GameSnapshot, MoveEvent, MoveResult, PopTile, Position
from .storage import JsonFileStore, MemoryStore, SettingsStore

__all__ = [
    "Difficulty",
    "DifficultyProfile",
    "Direction",
    "GameSnapshot",
    "GridEngine",
    "JsonFileStore",
    "MemoryStore",
    "MoveEvent",
    "MoveResult",
    "PopTile",
    "Position",
    "SettingsStore",
    "has_possible_moves",
    "legal_directions",
    "legal_directions_mask",
]
