# -*- coding: utf-8 -*-
"""
Collaborators of the animator: a renderer and a frame scheduler.
"""
from abc import ABC, abstractmethod
from typing import Callable, Collection, Sequence

from numpy import ndarray

from merge2048.core.models import MoveEvent, PopTile, Position


class Renderer(ABC):
    """
    Base class for anything able to draw the game.

    Only plain positions, values and numbers are passed in; drawing-library objects stay inside
    the implementation.
    """

    @abstractmethod
    def draw_board(self):
        """
        Clears the drawing and draws the empty board with its cell backgrounds.
        """

    @abstractmethod
    def draw_tiles(self, grid: ndarray, exclude: Collection[Position] = ()):
        """
        Draws every tile of the grid at rest.

        Parameters
        ----------
        grid: ndarray
            Grid to draw, 0 for empty cells
        exclude: Collection[Position]
            Cells left undrawn
        """

    @abstractmethod
    def draw_sliding_tiles(self, events: Sequence[MoveEvent], progress: float):
        """
        Draws tiles on their way from source to target.

        Parameters
        ----------
        events: Sequence[MoveEvent]
            Tiles to draw, with their pre-move value
        progress: float
            Eased fraction of the way travelled
        """

    @abstractmethod
    def draw_pop_tiles(self, pops: Sequence[PopTile], scale: float):
        """
        Draws merged tiles scaled around their cell centre.

        Parameters
        ----------
        pops: Sequence[PopTile]
            Merged tiles
        scale: float
            Scale factor, 1 for the resting size
        """

    @abstractmethod
    def present(self):
        """
        Pushes the drawn frame to the screen.
        """

    def render_game(self, grid: ndarray):
        """
        Draws the settled grid.

        Parameters
        ----------
        grid: ndarray
            Grid to draw
        """
        self.draw_board()
        self.draw_tiles(grid)
        self.present()

    def show_score(self, score: int, best: int, delta: int = 0):
        """
        Displays the scores. Does nothing by default.

        Parameters
        ----------
        score: int
            Current score
        best: int
            Best score
        delta: int
            Points gained by the last move
        """

    def show_message(self, won: bool):
        """
        Displays the "won" or "game over" banner. Does nothing by default.

        Parameters
        ----------
        won: bool
            True for the "won" banner
        """

    def clear_message(self):
        """
        Removes the banner. Does nothing by default.
        """

    def set_theme(self, name: str):
        """
        Switches the colour theme. Does nothing by default.

        Parameters
        ----------
        name: str
            Theme name
        """


class FrameScheduler(ABC):
    """
    Base class for a "next frame" primitive tied to the display refresh.
    """

    @abstractmethod
    def request_frame(self, callback: Callable[[float], None]) -> int:
        """
        Schedules a single call of ``callback(now)`` on the next frame.

        Parameters
        ----------
        callback: Callable[[float], None]
            Function receiving the frame timestamp, in seconds

        Returns
        -------
        int
            Handle usable with ``cancel_frame``
        """

    @abstractmethod
    def cancel_frame(self, handle: int):
        """
        Cancels a scheduled frame. Unknown or already run handles are ignored.

        Parameters
        ----------
        handle: int
            Handle returned by ``request_frame``
        """
