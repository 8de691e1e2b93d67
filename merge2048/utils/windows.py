# -*- coding: utf-8 -*-
"""
Graphical User Interface for the 2048 game

This module draws the game board in a Matplotlib window. Tiles are rounded patches placed in data
coordinates, so a frame of the move animation is just a set of patches at interpolated or scaled
positions. It also provides a frame scheduler built on the canvas timers.
"""
import time
from itertools import count
from typing import Callable, Collection, Optional, Sequence

from matplotlib import pyplot as plt
from matplotlib.backend_bases import Event
from matplotlib.patches import FancyBboxPatch
from numpy import ndarray

from merge2048.animation.base import FrameScheduler, Renderer
from merge2048.core.models import MoveEvent, PopTile
from merge2048.utils.themes import Theme, get_theme, luminance

# ##: Board geometry, in tile units.
TILE = 1.0
GAP = 0.12
RADIUS = 0.08


class WindowBoard(Renderer):
    """
    A Matplotlib window rendering the 2048 board.

    Methods
    -------
    render_game(grid: ndarray)
        Draw the settled grid.
    show_score(score: int, best: int, delta: int = 0)
        Update the score line above the board.
    show_message(won: bool)
        Display the "won" or "game over" banner.
    show_notice(text: str)
        Display a short notice, such as a confirmation request.
    register_key_handler(key_handler: Callable)
        Register a function to handle keyboard events.
    show(block: bool = True)
        Display the game window.
    close()
        Close the game window.

    Notes
    -----
    - Row 0 is drawn at the top of the board.
    - Every frame removes the tiles of the previous one; the banner and score line persist.
    """

    def __init__(self, title: str, size: int, theme: str = 'classic'):
        """
        Initialize the game board window.

        Parameters
        ----------
        title : str
            The title of the window.
        size : int
            The size of the game board (e.g., 4 for a 4x4 board).
        theme : str, optional
            Name of the colour theme (default is ``classic``).
        """
        self.size = size
        self.theme: Theme = get_theme(theme)
        self.theme_name = theme
        self.extent = GAP + size * (TILE + GAP)
        self._artists = []
        self._banner = None
        self._notice = None

        self.fig, self.axe = plt.subplots(figsize=(5, 5.5))
        self.fig.canvas.manager.set_window_title(title)
        self._release_default_keys()
        self._setup_axes()
        self.closed = False
        self.fig.canvas.mpl_connect("close_event", self._close_handler)

    def _release_default_keys(self):
        """
        Disconnect the default Matplotlib key bindings.

        The toolbar shortcuts (pan on ``p``, back on ``c``, ``backspace`` and ``left``, forward on ``right``)
        clash with the game keys, so the game window receives keys only through ``register_key_handler``.
        """
        manager = self.fig.canvas.manager
        handler_id = getattr(manager, "key_press_handler_id", None)
        if handler_id is not None:
            self.fig.canvas.mpl_disconnect(handler_id)
            manager.key_press_handler_id = None

    def _setup_axes(self):
        """
        Set up the axes: square board, no ticks, row 0 on top.
        """
        self.fig.subplots_adjust(left=0.02, bottom=0.02, right=0.98, top=0.9)
        self.axe.set_xlim(0, self.extent)
        self.axe.set_ylim(self.extent, 0)
        self.axe.set_aspect("equal")
        self.axe.set_xticks([])
        self.axe.set_yticks([])
        for spine in self.axe.spines.values():
            spine.set_visible(False)
        self._apply_theme()

    def _apply_theme(self):
        self.axe.set_facecolor(self.theme.board)
        self.fig.set_facecolor(self.theme.board)
        self.axe.title.set_color(self._ink(self.theme.board))

    def _ink(self, background: str) -> str:
        return self.theme.text_dark if luminance(background) > 0.4 else self.theme.text_light

    def _close_handler(self, event: Optional[Event] = None):
        """
        Handle the window close event.

        Parameters
        ----------
        event : Optional[Event]
            The close event (not used but required for event handling).
        """
        self.closed = True

    def set_theme(self, name: str):
        """
        Switch the colour theme.

        Parameters
        ----------
        name : str
            Theme name.

        Raises
        ------
        KeyError
            If the theme does not exist.
        """
        self.theme = get_theme(name)
        self.theme_name = name
        self._apply_theme()

    def _top_left(self, row: float, col: float) -> tuple[float, float]:
        return GAP + col * (TILE + GAP), GAP + row * (TILE + GAP)

    def _font_size(self, value: int) -> float:
        """
        Font size in points, shrinking for long numbers.
        """
        tile_pixels = self.axe.bbox.width / self.extent * TILE
        base = tile_pixels * 0.5
        if value >= 1000:
            base *= 0.4
        elif value >= 100:
            base *= 0.5
        elif value >= 10:
            base *= 0.6
        pixels = max(10.0, min(base, 36.0))
        return pixels * 72.0 / self.fig.dpi

    def _draw_tile(
        self, x: float, y: float, width: float, value: int, font_scale: float = 1.0, color: Optional[str] = None
    ):
        fill = color if color is not None else self.theme.tile_color(value)
        patch = FancyBboxPatch(
            (x, y),
            width,
            width,
            boxstyle=f"round,pad=0,rounding_size={RADIUS * width}",
            facecolor=fill,
            edgecolor="none",
        )
        self.axe.add_patch(patch)
        self._artists.append(patch)
        if value:
            text = self.axe.text(
                x + width / 2,
                y + width / 2,
                str(value),
                ha="center",
                va="center",
                color=self.theme.text_color(value),
                fontsize=self._font_size(value) * font_scale,
                fontweight="bold",
            )
            self._artists.append(text)

    def draw_board(self):
        for artist in self._artists:
            artist.remove()
        self._artists = []
        for row in range(self.size):
            for col in range(self.size):
                x, y = self._top_left(row, col)
                self._draw_tile(x, y, TILE, 0, color=self.theme.cell)

    def draw_tiles(self, grid: ndarray, exclude: Collection = ()):
        excluded = set(exclude)
        for row in range(self.size):
            for col in range(self.size):
                value = int(grid[row, col])
                if value and (row, col) not in excluded:
                    x, y = self._top_left(row, col)
                    self._draw_tile(x, y, TILE, value)

    def draw_sliding_tiles(self, events: Sequence[MoveEvent], progress: float):
        for event in events:
            x_from, y_from = self._top_left(*event.source)
            x_to, y_to = self._top_left(*event.target)
            self._draw_tile(
                x_from + (x_to - x_from) * progress,
                y_from + (y_to - y_from) * progress,
                TILE,
                event.origin_value,
            )

    def draw_pop_tiles(self, pops: Sequence[PopTile], scale: float):
        for pop in pops:
            x, y = self._top_left(*pop.position)
            width = TILE * scale
            offset = (width - TILE) / 2
            self._draw_tile(x - offset, y - offset, width, pop.value, font_scale=min(1.1, scale + 0.02))

    def present(self):
        self.fig.canvas.draw_idle()

    def show_score(self, score: int, best: int, delta: int = 0):
        """
        Update the score line.

        Parameters
        ----------
        score : int
            Current score.
        best : int
            Best score.
        delta : int, optional
            Points gained by the last move, shown when positive.
        """
        gained = f" (+{delta})" if delta > 0 else ""
        self.axe.set_title(f"Score {score}{gained}    Best {best}", fontweight="bold")
        self.fig.canvas.draw_idle()

    def show_message(self, won: bool):
        """
        Display the end-of-game banner.

        Parameters
        ----------
        won : bool
            True for the "won" banner, False for "game over".
        """
        self.clear_message()
        message = "You win!" if won else "Game over!"
        self._banner = self.axe.text(
            self.extent / 2,
            self.extent / 2,
            f"{message}\nPress backspace to play again",
            ha="center",
            va="center",
            fontsize="x-large",
            fontweight="demibold",
            color=self._ink(self.theme.cell),
            bbox={"facecolor": self.theme.cell, "alpha": 0.85, "edgecolor": "none", "boxstyle": "round"},
            zorder=10,
        )
        self.fig.canvas.draw_idle()

    def clear_message(self):
        """
        Remove the end-of-game banner, if any.
        """
        if self._banner is not None:
            self._banner.remove()
            self._banner = None
            self.fig.canvas.draw_idle()

    def show_notice(self, text: str):
        """
        Display a short notice near the bottom of the board, such as a confirmation request.

        Parameters
        ----------
        text : str
            Notice to display.
        """
        self.clear_notice()
        self._notice = self.axe.text(
            self.extent / 2,
            self.extent - GAP - TILE / 2,
            text,
            ha="center",
            va="center",
            fontsize="medium",
            color=self._ink(self.theme.cell),
            bbox={"facecolor": self.theme.cell, "alpha": 0.9, "edgecolor": "none", "boxstyle": "round"},
            zorder=11,
        )
        self.fig.canvas.draw_idle()

    def clear_notice(self):
        if self._notice is not None:
            self._notice.remove()
            self._notice = None
            self.fig.canvas.draw_idle()

    def register_key_handler(self, key_handler: Callable):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler : Callable
            A function to handle keyboard events.
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    def register_drag_handler(self, drag_handler: Callable[[float, float], None]):
        """
        Register a handler for mouse drags, the desktop stand-in for swipes.

        Parameters
        ----------
        drag_handler : Callable[[float, float], None]
            Receives the displacement in pixels, x to the right and y downwards.
        """
        pressed = {}

        def on_press(event):
            pressed["origin"] = (event.x, event.y)

        def on_release(event):
            origin = pressed.pop("origin", None)
            if origin is None or event.x is None or event.y is None:
                return
            # ##: Display coordinates grow upwards.
            drag_handler(event.x - origin[0], origin[1] - event.y)

        self.fig.canvas.mpl_connect("button_press_event", on_press)
        self.fig.canvas.mpl_connect("button_release_event", on_release)

    def register_resize_handler(self, resize_handler: Callable):
        """
        Register a function called when the window is resized.

        Parameters
        ----------
        resize_handler : Callable
            A function to handle resize events.
        """
        self.fig.canvas.mpl_connect("resize_event", resize_handler)

    @classmethod
    def show(cls, block: bool = True):
        """
        Show the window and start the Matplotlib event loop.

        Parameters
        ----------
        block : bool, optional
            If True, the event loop is blocking; otherwise, it's non-blocking (default is True).
        """
        if not block:
            plt.ion()
        plt.show()

    def close(self):
        """
        Close the window.
        """
        plt.close(self.fig)
        self.closed = True


class TimerScheduler(FrameScheduler):
    """
    Frame scheduler backed by single-shot Matplotlib canvas timers.

    Parameters
    ----------
    window : WindowBoard
        Window whose canvas owns the timers.
    interval : float, optional
        Delay before a requested frame, in seconds (default is 0.016).
    clock : Callable[[], float], optional
        Time source passed to the frame callbacks.
    """

    def __init__(self, window: WindowBoard, interval: float = 0.016, clock: Callable[[], float] = time.perf_counter):
        self.window = window
        self.interval = interval
        self.clock = clock
        self._handles = count(1)
        self._timers = {}

    def request_frame(self, callback: Callable[[float], None]) -> int:
        handle = next(self._handles)
        timer = self.window.fig.canvas.new_timer(interval=max(1, int(self.interval * 1000)))
        timer.single_shot = True
        timer.add_callback(self._fire, handle, callback)
        self._timers[handle] = timer
        timer.start()
        return handle

    def _fire(self, handle: int, callback: Callable[[float], None]):
        if self._timers.pop(handle, None) is None:
            return
        callback(self.clock())

    def cancel_frame(self, handle: int):
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.stop()
