"""
Host controller: routes player input through the grid engine and the move animator.
"""

import logging
import time
from typing import Callable

from merge2048.animation.animator import MoveAnimator
from merge2048.animation.base import FrameScheduler, Renderer
from merge2048.config import GameConfig
from merge2048.core.difficulty import Difficulty
from merge2048.core.engine import GridEngine
from merge2048.core.models import Direction
from merge2048.core.storage import MemoryStore, SettingsStore
from merge2048.utils.themes import get_theme

_logger = logging.getLogger(__name__)


class Game2048:
    """
    A playable 2048 game.

    The controller owns the input gate: a move is ignored while the game is over, won, or a previous
    move is still being animated. After each animation it spawns the next tile and checks for the end
    of the game.

    Parameters
    ----------
    renderer : Renderer
        Draws frames, scores and banners.
    scheduler : FrameScheduler
        Frame loop used by the animator.
    config : GameConfig, optional
        Grid, difficulty, theme and animation settings.
    store : SettingsStore, optional
        Best score and theme persistence.
    seed : int, optional
        Seed of the tile spawns.
    clock : Callable[[], float], optional
        Time source of the animator.
    """

    def __init__(
        self,
        renderer: Renderer,
        scheduler: FrameScheduler,
        config: GameConfig | None = None,
        store: SettingsStore | None = None,
        seed: int | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.config = config if config is not None else GameConfig()
        self.store = store if store is not None else MemoryStore()
        self.renderer = renderer

        self.engine = GridEngine(
            size=self.config.size,
            difficulty=self.config.difficulty,
            store=self.store,
            seed=seed,
            win_value=self.config.win_value,
            start_tiles=self.config.start_tiles,
        )
        self.animator = MoveAnimator(renderer, scheduler, config=self.config.animation, clock=clock)
        self.animator.set_grid(self.engine.grid)

        self.started = False
        self._cycle_pending = False

        theme = self.store.load_theme() or self.config.theme
        self.change_theme(theme, persist=False)

        self.renderer.show_score(self.engine.score, self.engine.best_score)
        self.renderer.clear_message()
        self.renderer.render_game(self.engine.grid)

    @property
    def accepts_moves(self) -> bool:
        """False while the game is over, won or animating."""
        return not (self.engine.game_over or self.engine.won or self.animator.is_animating)

    def new_game(self, difficulty: Difficulty | str | None = None):
        """
        Drop the current session and start a new one.

        Parameters
        ----------
        difficulty : Difficulty | str, optional
            Difficulty of the new session; the current one is kept when omitted.
        """
        self.animator.cancel_animations()
        self._cycle_pending = False
        self.renderer.clear_message()

        snapshot = self.engine.start_game(difficulty)
        self.started = True

        self.renderer.show_score(snapshot.score, snapshot.best_score)
        self.renderer.render_game(self.engine.grid)

    def handle_move(self, direction: Direction) -> bool:
        """
        Play a move if the game accepts one.

        Parameters
        ----------
        direction : Direction
            Direction chosen by the player.

        Returns
        -------
        bool
            True if tiles moved and an animation started.
        """
        if not self.started:
            self.new_game()
            return False
        if not self.accepts_moves:
            return False

        result = self.engine.move(direction)
        if not result.moved:
            return False

        self.renderer.show_score(self.engine.score, self.engine.best_score, result.score_delta)
        self._cycle_pending = True
        self.animator.start_move_animation(result.events, self._on_animation_complete)
        return True

    def _on_animation_complete(self):
        self._cycle_pending = False
        self.engine.spawn_tile()
        game_over = self.engine.check_terminal()

        self.renderer.show_score(self.engine.score, self.engine.best_score)
        self.renderer.render_game(self.engine.grid)

        if game_over:
            self.renderer.show_message(won=False)
        elif self.engine.won:
            self.renderer.show_message(won=True)

    def change_difficulty(self, name: str, confirm: Callable[[], bool] | None = None) -> bool:
        """
        Switch difficulty, which restarts the game.

        Parameters
        ----------
        name : str
            Difficulty name.
        confirm : Callable[[], bool], optional
            Asked before dropping a running game; returning False keeps the current one.

        Returns
        -------
        bool
            True if a new game started with the new difficulty.

        Raises
        ------
        ValueError
            If the difficulty name is unknown.
        """
        difficulty = Difficulty.from_name(name)
        if difficulty is self.engine.difficulty:
            return False
        if self.started and confirm is not None and not confirm():
            return False

        _logger.info('Difficulty changed from %s to %s', self.engine.difficulty.value, difficulty.value)
        self.new_game(difficulty)
        return True

    def change_theme(self, name: str, persist: bool = True) -> bool:
        """
        Switch the colour theme and redraw.

        Parameters
        ----------
        name : str
            Theme name.
        persist : bool, optional
            Save the choice in the settings store (default is True).

        Returns
        -------
        bool
            False if no theme has this name.
        """
        try:
            get_theme(name)
        except KeyError:
            _logger.warning('Ignoring unknown theme %r', name)
            return False

        self.renderer.set_theme(name)
        if persist:
            self.store.save_theme(name)
        if not self.animator.is_animating:
            self.renderer.render_game(self.engine.grid)
        return True

    def handle_resize(self):
        """
        Stop any animation and redraw the settled grid.

        A move interrupted mid-animation still gets its new tile and terminal check.
        """
        self.animator.cancel_animations()
        if self._cycle_pending:
            self._on_animation_complete()
        else:
            self.renderer.render_game(self.engine.grid)
