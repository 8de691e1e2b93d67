"""
Tests for the move animator state machine.
"""

from math import isclose
from unittest import TestCase, main

import numpy as np
from fakes import FakeClock, ManualScheduler, RecordingRenderer

from merge2048.animation.animator import AnimationPhase, MoveAnimator
from merge2048.animation.easing import clamp_progress, ease_out_cubic, pop_scale
from merge2048.config import AnimationConfig
from merge2048.core.engine import GridEngine
from merge2048.core.models import Direction, PopTile, Position

CONFIG = AnimationConfig(move_duration=0.1, pop_duration=0.2, pop_scale=0.28)


class TestEasing(TestCase):
    """Progress curves."""

    def test_clamp(self):
        self.assertEqual(clamp_progress(0.05, 0.1), 0.5)
        self.assertEqual(clamp_progress(0.3, 0.1), 1.0)
        self.assertEqual(clamp_progress(-1.0, 0.1), 0.0)
        self.assertEqual(clamp_progress(0.0, 0.0), 1.0)

    def test_ease_out_cubic(self):
        self.assertEqual(ease_out_cubic(0.0), 0.0)
        self.assertEqual(ease_out_cubic(0.5), 0.875)
        self.assertEqual(ease_out_cubic(1.0), 1.0)

    def test_pop_scale(self):
        """The pop rises to its peak mid-phase and settles back to 1."""
        self.assertEqual(pop_scale(0.0, 0.28), 1.0)
        self.assertTrue(isclose(pop_scale(0.5, 0.28), 1.28))
        self.assertTrue(isclose(pop_scale(1.0, 0.28), 1.0, abs_tol=1e-12))


class TestMoveAnimator(TestCase):
    """Transitions of the animator."""

    def setUp(self):
        self.clock = FakeClock()
        self.scheduler = ManualScheduler(self.clock)
        self.renderer = RecordingRenderer()
        self.animator = MoveAnimator(self.renderer, self.scheduler, config=CONFIG, clock=self.clock)
        self.completed = 0

        # ##: Row [2, 2, 4, _] moved left: one merge and one slide.
        self.engine = GridEngine(seed=0)
        grid = np.zeros((4, 4), dtype=np.int64)
        grid[0] = [2, 2, 4, 0]
        self.engine.load_grid(grid)
        self.result = self.engine.move(Direction.LEFT)
        self.animator.set_grid(self.engine.grid)

    def _complete(self):
        self.completed += 1

    def test_starts_idle(self):
        self.assertIs(self.animator.phase, AnimationPhase.IDLE)
        self.assertFalse(self.animator.is_animating)

    def test_start_enters_sliding(self):
        """Starting records the time and schedules one frame without drawing."""
        self.clock.now = 5.0
        self.animator.start_move_animation(self.result.events, self._complete)
        self.assertIs(self.animator.phase, AnimationPhase.SLIDING)
        self.assertTrue(self.animator.is_animating)
        self.assertEqual(len(self.scheduler.pending), 1)
        self.assertEqual(self.renderer.calls, [])

    def test_slide_frame(self):
        """Targets are hidden and moving tiles keep their pre-merge value."""
        self.animator.start_move_animation(self.result.events, self._complete)
        self.scheduler.run_frame(0.05)

        self.assertIs(self.animator.phase, AnimationPhase.SLIDING)
        self.assertEqual(self.renderer.names(), ['draw_board', 'draw_tiles', 'draw_sliding_tiles', 'present'])

        grid, excluded = self.renderer.last('draw_tiles')
        self.assertEqual(excluded, {Position(0, 0), Position(0, 1)})
        np.testing.assert_array_equal(grid[0], [4, 4, 0, 0])

        events, progress = self.renderer.last('draw_sliding_tiles')
        self.assertEqual(progress, 0.875)
        self.assertEqual([event.origin_value for event in events], [2, 4])

    def test_slide_then_pop(self):
        """A move with merges pops the merged tiles before completing."""
        self.animator.start_move_animation(self.result.events, self._complete)
        self.scheduler.run_frame(0.05)
        self.scheduler.run_frame(0.1)

        self.assertIs(self.animator.phase, AnimationPhase.POPPING)
        self.assertEqual(self.completed, 0)

        # ##>: The pop phase starts when the slide ends.
        self.scheduler.run_frame(0.2)
        pops, scale = self.renderer.last('draw_pop_tiles')
        self.assertEqual(pops, (PopTile(Position(0, 0), 4),))
        self.assertTrue(isclose(scale, 1.28))

        # ##>: Popping draws every tile at its true value.
        _, excluded = self.renderer.last('draw_tiles')
        self.assertEqual(excluded, frozenset())

        self.scheduler.run_frame(0.35)
        self.assertIs(self.animator.phase, AnimationPhase.IDLE)
        self.assertEqual(self.completed, 1)
        self.assertEqual(self.scheduler.pending, {})

    def test_slide_without_merge_completes(self):
        """A move without merges skips the pop phase."""
        grid = np.zeros((4, 4), dtype=np.int64)
        grid[2] = [0, 0, 2, 0]
        self.engine.load_grid(grid)
        result = self.engine.move(Direction.LEFT)

        self.animator.start_move_animation(result.events, self._complete)
        self.scheduler.run_frame(0.2)

        self.assertIs(self.animator.phase, AnimationPhase.IDLE)
        self.assertEqual(self.completed, 1)
        self.assertNotIn('draw_pop_tiles', self.renderer.names())
        self.assertEqual(self.scheduler.pending, {})

    def test_completion_fires_once_per_cycle(self):
        """Two consecutive moves complete once each."""
        for _ in range(2):
            self.animator.start_move_animation(self.result.events, self._complete)
            self.scheduler.run_all()
        self.assertEqual(self.completed, 2)

    def test_cancel_skips_callback(self):
        """Cancelling returns to idle without completing."""
        self.animator.start_move_animation(self.result.events, self._complete)
        self.scheduler.run_frame(0.05)
        self.animator.cancel_animations()

        self.assertIs(self.animator.phase, AnimationPhase.IDLE)
        self.assertEqual(self.scheduler.pending, {})
        self.assertEqual(self.completed, 0)

    def test_cancel_during_pop(self):
        """Cancelling the pop phase also drops the callback."""
        self.animator.start_move_animation(self.result.events, self._complete)
        self.scheduler.run_frame(0.1)
        self.assertIs(self.animator.phase, AnimationPhase.POPPING)

        self.animator.cancel_animations()
        self.assertIs(self.animator.phase, AnimationPhase.IDLE)
        self.assertEqual(self.completed, 0)

        # ##>: The animator accepts a new move afterwards.
        self.animator.start_move_animation(self.result.events, self._complete)
        self.scheduler.run_all()
        self.assertEqual(self.completed, 1)

    def test_cancel_when_idle(self):
        self.animator.cancel_animations()
        self.assertIs(self.animator.phase, AnimationPhase.IDLE)

    def test_start_while_animating(self):
        """Only one move can be animated at a time."""
        self.animator.start_move_animation(self.result.events, self._complete)
        with self.assertRaises(RuntimeError):
            self.animator.start_move_animation(self.result.events, self._complete)

    def test_start_without_grid(self):
        animator = MoveAnimator(self.renderer, self.scheduler, config=CONFIG, clock=self.clock)
        with self.assertRaises(RuntimeError):
            animator.start_move_animation(self.result.events)

    def test_animator_never_writes_grid(self):
        """The grid is identical before and after a full animation."""
        before = self.engine.grid.copy()
        self.animator.start_move_animation(self.result.events, self._complete)
        self.scheduler.run_all()
        np.testing.assert_array_equal(self.engine.grid, before)


if __name__ == '__main__':
    main()
