"""
Value types shared by the grid engine, the animator and the renderers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from numpy import ndarray

from merge2048.core.difficulty import Difficulty


class Position(NamedTuple):
    """Grid coordinates, 0-indexed."""

    row: int
    col: int


class Direction(Enum):
    """
    Move direction.

    The value of each member is its unit vector ``(d_row, d_col)``.
    """

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def vector(self) -> tuple[int, int]:
        """Unit vector ``(d_row, d_col)`` of the direction."""
        return self.value


@dataclass(frozen=True)
class MoveEvent:
    """
    Displacement of one tile during a single move.

    Attributes
    ----------
    origin_value : int
        Value of the tile before the move.
    merged_value : int | None
        Value of the destination after a merge, ``None`` for a plain slide.
    source : Position
        Cell the tile left.
    target : Position
        Cell the tile ends in (for a merge, the cell it was absorbed into).
    is_merge : bool
        Whether the tile was absorbed into the destination tile.
    """

    origin_value: int
    merged_value: int | None
    source: Position
    target: Position
    is_merge: bool = False


@dataclass(frozen=True)
class MoveResult:
    """Outcome of ``GridEngine.move``."""

    moved: bool
    events: tuple[MoveEvent, ...]
    score_delta: int

    @property
    def merges(self) -> tuple[MoveEvent, ...]:
        """Merge events of the move."""
        return tuple(event for event in self.events if event.is_merge)


@dataclass(frozen=True)
class PopTile:
    """A settled merge destination drawn during the pop phase."""

    position: Position
    value: int


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of a game session."""

    grid: ndarray
    score: int
    best_score: int
    game_over: bool
    won: bool
    difficulty: Difficulty
