"""
Grid engine for the 2048 game: moves, merges, scoring, tile spawning and terminal detection.
"""

import logging
from math import floor

from numpy import argwhere, asarray, int64, ndarray, zeros
from numpy.random import PCG64DXSM, Generator

from merge2048.core.difficulty import Difficulty
from merge2048.core.gamemove import has_possible_moves, legal_directions
from merge2048.core.models import Direction, GameSnapshot, MoveEvent, MoveResult, Position
from merge2048.core.storage import MemoryStore, SettingsStore

_logger = logging.getLogger(__name__)


class GridEngine:
    """
    Logical core of a 2048 session.

    The engine owns the grid and is the only object that writes to it. It never waits on
    animations: gating moves while the game is over, won or animating is up to the caller.

    Parameters
    ----------
    size : int, optional
        Side of the square grid (default is 4).
    difficulty : Difficulty | str, optional
        Difficulty of the first session (default is ``normal``).
    store : SettingsStore, optional
        Best score persistence; an in-memory store is used when omitted.
    seed : int, optional
        Seed of the random generator, for reproducible spawns.
    win_value : int, optional
        Tile value that wins the game (default is 2048).
    start_tiles : int, optional
        Number of tiles placed by ``start_game`` (default is 2).
    """

    def __init__(
        self,
        size: int = 4,
        difficulty: Difficulty | str = Difficulty.NORMAL,
        store: SettingsStore | None = None,
        seed: int | None = None,
        win_value: int = 2048,
        start_tiles: int = 2,
    ):
        if size < 2:
            raise ValueError(f'size must be >= 2, got {size}')

        self.size = size
        self.win_value = win_value
        self.start_tiles = start_tiles
        self._difficulty = Difficulty.from_name(difficulty)
        self._store = store if store is not None else MemoryStore()
        self._rng = Generator(PCG64DXSM(seed))

        # ##: The grid is mutated in place so that read-only views stay valid across sessions.
        self._grid = zeros((size, size), dtype=int64)
        self._view = self._grid.view()
        self._view.flags.writeable = False

        self.score = 0
        self.best_score = self._store.load_best_score()
        self.game_over = False
        self.won = False

    @property
    def difficulty(self) -> Difficulty:
        """Difficulty of the current session."""
        return self._difficulty

    @property
    def grid(self) -> ndarray:
        """Read-only view of the live grid."""
        return self._view

    def snapshot(self) -> GameSnapshot:
        """
        Copy the session state.

        Returns
        -------
        GameSnapshot
            Independent, read-only copy of grid, scores and flags.
        """
        grid = self._grid.copy()
        grid.flags.writeable = False
        return GameSnapshot(
            grid=grid,
            score=self.score,
            best_score=self.best_score,
            game_over=self.game_over,
            won=self.won,
            difficulty=self._difficulty,
        )

    def start_game(self, difficulty: Difficulty | str | None = None) -> GameSnapshot:
        """
        Start a new session.

        Parameters
        ----------
        difficulty : Difficulty | str, optional
            New difficulty for the session; the current one is kept when omitted.

        Returns
        -------
        GameSnapshot
            The initial state: an empty grid with ``start_tiles`` random tiles and a zero score.
        """
        if difficulty is not None:
            self._difficulty = Difficulty.from_name(difficulty)

        self._grid.fill(0)
        self.score = 0
        self.game_over = False
        self.won = False
        for _ in range(self.start_tiles):
            self.spawn_tile()

        _logger.info('New %dx%d game on %s difficulty', self.size, self.size, self._difficulty.value)
        return self.snapshot()

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _traversals(self, direction: Direction) -> tuple[list[int], list[int]]:
        """
        Build the row and column visiting order, farthest cells along the direction first.
        """
        d_row, d_col = direction.vector
        rows = list(range(self.size))
        cols = list(range(self.size))
        if d_row == 1:
            rows.reverse()
        if d_col == 1:
            cols.reverse()
        return rows, cols

    def _find_farthest(self, row: int, col: int, direction: Direction) -> tuple[Position, Position | None]:
        """
        Walk from a cell along the direction over empty cells.

        Returns
        -------
        tuple[Position, Position | None]
            The farthest empty cell reached (the start cell if none) and the first occupied cell
            beyond it, or None when the walk stops at the border.
        """
        d_row, d_col = direction.vector
        previous = Position(row, col)
        current = Position(row + d_row, col + d_col)
        while self._in_bounds(*current) and self._grid[current] == 0:
            previous = current
            current = Position(current.row + d_row, current.col + d_col)
        return previous, (current if self._in_bounds(*current) else None)

    def move(self, direction: Direction) -> MoveResult:
        """
        Slide every tile in a direction, merging equal tiles.

        Parameters
        ----------
        direction : Direction
            Direction of the move.

        Returns
        -------
        MoveResult
            Whether anything moved, the tile events in processing order and the score gained.

        Raises
        ------
        TypeError
            If ``direction`` is not a ``Direction``.

        Notes
        -----
        - A cell produced by a merge does not merge again during the same move, so ``[2, 2, 4, 0]``
          moved left gives ``[4, 4, 0, 0]``.
        - The gained score is the raw merge sum times the bonus multiplier, rounded half up.
        - A move that changes nothing leaves the whole session untouched.
        """
        if not isinstance(direction, Direction):
            raise TypeError(f'direction must be a Direction, got {direction!r}')

        events = []
        merged_cells = set()
        raw_score = 0
        rows, cols = self._traversals(direction)

        for row in rows:
            for col in cols:
                value = int(self._grid[row, col])
                if value == 0:
                    continue

                source = Position(row, col)
                farthest, following = self._find_farthest(row, col, direction)

                # ##: Merge with the blocking tile if it holds the same value and was not merged already.
                if following is not None and following not in merged_cells and self._grid[following] == value:
                    merged = value * 2
                    self._grid[following] = merged
                    self._grid[source] = 0
                    merged_cells.add(following)
                    raw_score += merged
                    events.append(MoveEvent(value, merged, source, following, is_merge=True))

                    if merged == self.win_value and not self.won:
                        self.won = True
                        _logger.info('Reached %d', self.win_value)

                elif farthest != source:
                    self._grid[farthest] = value
                    self._grid[source] = 0
                    events.append(MoveEvent(value, None, source, farthest, is_merge=False))

        score_delta = self._apply_score(raw_score)
        _logger.debug('Move %s: %d events, +%d points', direction.name, len(events), score_delta)
        return MoveResult(moved=bool(events), events=tuple(events), score_delta=score_delta)

    def _apply_score(self, raw_score: int) -> int:
        """
        Add the weighted merge sum to the score, saving the best score when it is beaten.
        """
        if raw_score == 0:
            return 0

        bonus = int(floor(raw_score * self._difficulty.profile.score_bonus_multiplier + 0.5))
        self.score += bonus
        if self.score > self.best_score:
            self.best_score = self.score
            self._store.save_best_score(self.best_score)
        return bonus

    def spawn_tile(self) -> Position | None:
        """
        Place a new tile in a random empty cell.

        Returns
        -------
        Position | None
            The cell that received the tile, or None if the grid was full.

        Notes
        -----
        - The cell is chosen uniformly among the empty ones.
        - The tile is a 4 with the difficulty's ``four_spawn_probability``, else a 2.
        """
        empty_cells = argwhere(self._grid == 0)
        if len(empty_cells) == 0:
            return None

        row, col = empty_cells[self._rng.integers(len(empty_cells))]
        value = 4 if self._rng.random() < self._difficulty.profile.four_spawn_probability else 2
        position = Position(int(row), int(col))
        self._grid[position] = value
        return position

    def has_possible_moves(self) -> bool:
        """
        Check for an empty cell or two adjacent equal tiles.

        Returns
        -------
        bool
            True if the player can still move.
        """
        return has_possible_moves(self._grid)

    def legal_directions(self) -> list[Direction]:
        """
        List the directions that would change the grid.

        Returns
        -------
        list[Direction]
            Legal directions for the current grid.
        """
        return legal_directions(self._grid)

    def check_terminal(self) -> bool:
        """
        Flag the game as over when no move is possible.

        Returns
        -------
        bool
            The resulting ``game_over`` flag.
        """
        if not self.game_over and not self.has_possible_moves():
            self.game_over = True
            _logger.info('Game over with %d points', self.score)
        return self.game_over

    def load_grid(self, values) -> None:
        """
        Replace the grid content, keeping score and flags.

        Parameters
        ----------
        values : array_like
            A ``size`` x ``size`` array of tile values, ``0`` for empty cells.

        Raises
        ------
        ValueError
            If the shape does not match or a tile is not a positive power of two.
        """
        values = asarray(values, dtype=int64)
        if values.shape != (self.size, self.size):
            raise ValueError(f'grid must be {self.size}x{self.size}, got {values.shape}')
        tiles = values[values != 0]
        if (tiles < 2).any() or (tiles & (tiles - 1)).any():
            raise ValueError('tiles must be positive powers of two')
        self._grid[...] = values
