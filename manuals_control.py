# -*- coding: utf-8 -*-
"""
Play 2048 Game

Sound effects are not part of this desktop version: the game is silent.
"""
import argparse
import logging
import time
from pathlib import Path
from typing import Any, Callable, Optional

from merge2048 import Game2048, GameConfig
from merge2048.controls import key_direction, swipe_direction
from merge2048.core import JsonFileStore
from merge2048.core.difficulty import Difficulty
from merge2048.utils import THEMES
from merge2048.utils.windows import TimerScheduler, WindowBoard

# ##: Keys selecting a difficulty or a theme.
DIFFICULTY_KEYS = {"1": "easy", "2": "normal", "3": "hard"}
THEME_KEYS = {"c": "classic", "d": "dark", "p": "pastel", "n": "neon"}

# ##: Seconds within which the same difficulty key must be pressed again.
CONFIRM_TIMEOUT = 3.0


class DifficultyConfirmation:
    """
    Confirm a difficulty change by pressing the same key twice.

    The first press shows a notice on the window; a second press of the same key within ``timeout`` seconds
    confirms. Any other key, or a late second press, starts over.

    Parameters
    ----------
    window: Any
        Window with ``show_notice`` and ``clear_notice``
    timeout: float
        Seconds allowed between the two presses
    clock: Callable[[], float]
        Time source
    """

    def __init__(self, window: Any, timeout: float = CONFIRM_TIMEOUT, clock: Callable[[], float] = time.monotonic):
        self.window = window
        self.timeout = timeout
        self.clock = clock
        self.pending: Optional[str] = None
        self.requested_at = 0.0

    def confirm(self, key: str) -> bool:
        """
        Register a press of a difficulty key.

        Parameters
        ----------
        key: str
            The difficulty key pressed

        Returns
        -------
        bool
            True if this press confirms the change.
        """
        now = self.clock()
        if self.pending == key and now - self.requested_at <= self.timeout:
            self.reset()
            return True

        self.pending = key
        self.requested_at = now
        self.window.show_notice(
            f"Switch to {DIFFICULTY_KEYS[key]}? The game restarts.\nPress {key} again to confirm"
        )
        return False

    def reset(self):
        if self.pending is not None:
            self.pending = None
            self.window.clear_notice()


def key_handler(game: Game2048, window: WindowBoard, confirmation: DifficultyConfirmation, event: Any):
    """
    Handle the keyboard.

    Parameters
    ----------
    game: Game2048
        The game controller

    window: WindowBoard
        Class to draw the game board

    confirmation: DifficultyConfirmation
        Confirmation of difficulty changes

    event: Any
        event to handle
    """
    if event.key in DIFFICULTY_KEYS:
        changed = game.change_difficulty(DIFFICULTY_KEYS[event.key], confirm=lambda: confirmation.confirm(event.key))
        if not changed and confirmation.pending != event.key:
            confirmation.reset()
        return None

    confirmation.reset()

    if event.key == "escape":
        window.close()
        return None

    if event.key in ("backspace", "enter"):
        game.new_game()
        return None

    if event.key in THEME_KEYS:
        game.change_theme(THEME_KEYS[event.key])
        return None

    direction = key_direction(event.key)
    if direction is not None:
        game.handle_move(direction)
    return None


def drag_handler(game: Game2048, threshold: float, d_x: float, d_y: float):
    """
    Handle a mouse drag as a swipe.

    Parameters
    ----------
    game: Game2048
        The game controller

    threshold: float
        Minimum displacement, in pixels

    d_x: float
        Horizontal displacement

    d_y: float
        Vertical displacement, positive downwards
    """
    direction = swipe_direction(d_x, d_y, threshold)
    if direction is not None:
        game.handle_move(direction)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play 2048 in a Matplotlib window.",
        epilog=(
            "Keys: arrows move, backspace or enter restarts, 1/2/3 pick the difficulty (press twice to confirm), "
            "c/d/p/n pick the theme, escape quits. Drag the mouse to swipe. The game has no sound effects."
        ),
    )
    parser.add_argument("--difficulty", choices=[member.value for member in Difficulty], default="normal")
    parser.add_argument("--theme", choices=sorted(THEMES), default=None, help="overrides the saved theme")
    parser.add_argument("--size", type=int, default=4, help="side of the grid")
    parser.add_argument("--seed", type=int, default=None, help="seed of the tile spawns")
    parser.add_argument(
        "--settings",
        type=Path,
        default=Path.home() / ".merge2048.json",
        help="file storing the best score and the theme",
    )
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    config = GameConfig(size=args.size, difficulty=args.difficulty)
    window_board = WindowBoard(title="2048 Game", size=config.size)
    scheduler = TimerScheduler(window_board, interval=config.animation.frame_interval)
    game = Game2048(window_board, scheduler, config=config, store=JsonFileStore(args.settings), seed=args.seed)
    confirmation = DifficultyConfirmation(window_board)

    if args.theme is not None:
        game.change_theme(args.theme)

    window_board.register_key_handler(lambda event: key_handler(game, window_board, confirmation, event))
    window_board.register_drag_handler(lambda d_x, d_y: drag_handler(game, config.swipe_threshold, d_x, d_y))
    window_board.register_resize_handler(lambda event: game.handle_resize())

    game.new_game()

    # Blocking event loop
    window_board.show(block=True)
