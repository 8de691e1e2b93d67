"""
Two-phase move animation: tiles slide to their targets, then merged tiles pop.

The animator replays a move that the grid engine has already applied. It only reads the grid,
through the read-only view given to ``set_grid``, and never writes to it.
"""

import logging
import time
from enum import Enum
from typing import Callable, Sequence

from numpy import ndarray

from merge2048.animation.base import FrameScheduler, Renderer
from merge2048.animation.easing import clamp_progress, ease_out_cubic, pop_scale
from merge2048.config import AnimationConfig
from merge2048.core.models import MoveEvent, PopTile

_logger = logging.getLogger(__name__)


class AnimationPhase(Enum):
    """State of the animator."""

    IDLE = 'idle'
    SLIDING = 'sliding'
    POPPING = 'popping'


class MoveAnimator:
    """
    State machine driving the animation of one move.

    Parameters
    ----------
    renderer : Renderer
        Target of every drawn frame.
    scheduler : FrameScheduler
        Provides the frame loop; one frame at most is pending at any time.
    config : AnimationConfig, optional
        Phase durations and pop amplitude.
    clock : Callable[[], float], optional
        Time source in seconds, on the same time base as the scheduler timestamps.

    Notes
    -----
    - ``IDLE -> SLIDING`` on ``start_move_animation``.
    - ``SLIDING -> POPPING`` when the slide completes and the move merged tiles, else ``-> IDLE``.
    - ``POPPING -> IDLE`` when the pop completes.
    - Reaching ``IDLE`` through completion calls the completion callback once; ``cancel_animations``
      reaches ``IDLE`` without calling it.
    """

    def __init__(
        self,
        renderer: Renderer,
        scheduler: FrameScheduler,
        config: AnimationConfig | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.renderer = renderer
        self.scheduler = scheduler
        self.config = config if config is not None else AnimationConfig()
        self.clock = clock

        self._phase = AnimationPhase.IDLE
        self._grid: ndarray | None = None
        self._events: tuple[MoveEvent, ...] = ()
        self._pops: tuple[PopTile, ...] = ()
        self._started_at = 0.0
        self._frame: int | None = None
        self._on_complete: Callable[[], None] | None = None

    @property
    def phase(self) -> AnimationPhase:
        """Current phase."""
        return self._phase

    @property
    def is_animating(self) -> bool:
        """True while a move is being animated."""
        return self._phase is not AnimationPhase.IDLE

    def set_grid(self, grid: ndarray):
        """
        Set the grid drawn under the animated tiles.

        Parameters
        ----------
        grid : ndarray
            Read-only view of the engine grid, already holding the post-move values.
        """
        self._grid = grid

    def start_move_animation(self, events: Sequence[MoveEvent], on_complete: Callable[[], None] | None = None):
        """
        Animate the events of one move.

        Parameters
        ----------
        events : Sequence[MoveEvent]
            Events returned by ``GridEngine.move``.
        on_complete : Callable[[], None], optional
            Called once, when the last phase is over.

        Raises
        ------
        RuntimeError
            If an animation is already running or no grid was set.
        """
        if self.is_animating:
            raise RuntimeError('A move animation is already running')
        if self._grid is None:
            raise RuntimeError('set_grid must be called before animating')

        self._events = tuple(events)
        self._pops = ()
        self._on_complete = on_complete
        self._phase = AnimationPhase.SLIDING
        self._started_at = self.clock()
        self._frame = self.scheduler.request_frame(self._on_frame)

    def cancel_animations(self):
        """
        Stop the running animation without calling its completion callback.
        """
        if self._frame is not None:
            self.scheduler.cancel_frame(self._frame)
            self._frame = None
        if self.is_animating:
            _logger.debug('Cancelled animation during %s', self._phase.value)
        self._reset()

    def _reset(self):
        self._phase = AnimationPhase.IDLE
        self._events = ()
        self._pops = ()
        self._on_complete = None

    def _on_frame(self, now: float):
        self._frame = None
        if self._phase is AnimationPhase.SLIDING:
            self._slide_frame(now)
        elif self._phase is AnimationPhase.POPPING:
            self._pop_frame(now)

    def _slide_frame(self, now: float):
        progress = clamp_progress(now - self._started_at, self.config.move_duration)

        # ##: Targets hold post-move values: hide them until the sliding tiles land.
        targets = {event.target for event in self._events}
        self.renderer.draw_board()
        self.renderer.draw_tiles(self._grid, exclude=targets)
        self.renderer.draw_sliding_tiles(self._events, ease_out_cubic(progress))
        self.renderer.present()

        if progress < 1.0:
            self._frame = self.scheduler.request_frame(self._on_frame)
            return

        self._pops = tuple(PopTile(event.target, event.merged_value) for event in self._events if event.is_merge)
        self._events = ()
        if self._pops:
            self._phase = AnimationPhase.POPPING
            self._started_at = self.clock()
            self._frame = self.scheduler.request_frame(self._on_frame)
        else:
            self._finish()

    def _pop_frame(self, now: float):
        progress = clamp_progress(now - self._started_at, self.config.pop_duration)

        self.renderer.draw_board()
        self.renderer.draw_tiles(self._grid)
        self.renderer.draw_pop_tiles(self._pops, pop_scale(progress, self.config.pop_scale))
        self.renderer.present()

        if progress < 1.0:
            self._frame = self.scheduler.request_frame(self._on_frame)
        else:
            self._finish()

    def _finish(self):
        callback = self._on_complete
        self._reset()
        if callback is not None:
            callback()
