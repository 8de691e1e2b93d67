"""
Tests for the keyboard handling of the launcher.
"""

from types import SimpleNamespace

import matplotlib

matplotlib.use('Agg')

import numpy as np  # noqa: E402
import pytest  # noqa: E402
from fakes import FakeClock, ManualScheduler, RecordingRenderer  # noqa: E402
from manuals_control import CONFIRM_TIMEOUT, DifficultyConfirmation, build_parser, key_handler, parse_args  # noqa: E402

from merge2048.config import instant_config  # noqa: E402
from merge2048.core.difficulty import Difficulty  # noqa: E402
from merge2048.core.storage import MemoryStore  # noqa: E402
from merge2048.game import Game2048  # noqa: E402


class NoticeWindow:
    """Window double recording notices."""

    def __init__(self):
        self.notice = None
        self.closed = False

    def show_notice(self, text):
        self.notice = text

    def clear_notice(self):
        self.notice = None

    def close(self):
        self.closed = True


@pytest.fixture
def setup():
    clock = FakeClock()
    window = NoticeWindow()
    game = Game2048(
        RecordingRenderer(), ManualScheduler(clock), config=instant_config(), store=MemoryStore(), seed=2, clock=clock
    )
    confirmation = DifficultyConfirmation(window, clock=clock)
    game.new_game()
    grid = np.zeros((4, 4), dtype=np.int64)
    grid[0] = [512, 256, 0, 0]
    game.engine.load_grid(grid)
    game.engine.score = 5000
    return game, window, confirmation, clock


def press(setup, key):
    game, window, confirmation, _ = setup
    key_handler(game, window, confirmation, SimpleNamespace(key=key))


class TestDifficultyKeys:
    """Difficulty keys must be confirmed before a running game is dropped."""

    def test_single_press_keeps_game(self, setup):
        game, window, _, _ = setup
        press(setup, '3')

        assert game.engine.score == 5000
        assert game.engine.difficulty is Difficulty.NORMAL
        assert 'hard' in window.notice

    def test_second_press_confirms(self, setup):
        game, window, _, clock = setup
        press(setup, '3')
        clock.now = 1.0
        press(setup, '3')

        assert game.engine.difficulty is Difficulty.HARD
        assert game.engine.score == 0
        assert window.notice is None

    def test_late_second_press_asks_again(self, setup):
        game, window, _, clock = setup
        press(setup, '3')
        clock.now = CONFIRM_TIMEOUT + 1.0
        press(setup, '3')

        assert game.engine.difficulty is Difficulty.NORMAL
        assert game.engine.score == 5000
        assert window.notice is not None

    def test_other_key_cancels_request(self, setup):
        game, window, confirmation, _ = setup
        press(setup, '3')
        press(setup, 'd')
        assert window.notice is None
        assert confirmation.pending is None

        press(setup, '3')
        assert game.engine.difficulty is Difficulty.NORMAL

    def test_switching_key_restarts_request(self, setup):
        game, _, confirmation, _ = setup
        press(setup, '3')
        press(setup, '1')
        assert confirmation.pending == '1'
        assert game.engine.difficulty is Difficulty.NORMAL

    def test_current_difficulty_clears_request(self, setup):
        _, window, confirmation, _ = setup
        press(setup, '3')
        press(setup, '2')
        assert confirmation.pending is None
        assert window.notice is None

    def test_escape_closes_window(self, setup):
        _, window, _, _ = setup
        press(setup, 'escape')
        assert window.closed


class TestOptions:
    """Command line options."""

    def test_defaults(self):
        args = parse_args([])
        assert (args.difficulty, args.theme, args.size, args.seed) == ('normal', None, 4, None)

    def test_help_describes_keys_and_silence(self):
        epilog = build_parser().epilog
        assert 'press twice to confirm' in epilog
        assert 'no sound effects' in epilog
