from unittest import TestCase, main

import numpy as np
from numpy import array

from merge2048.core.engine import GridEngine
from merge2048.core.gamemove import has_possible_moves, legal_directions, legal_directions_mask
from merge2048.core.models import Direction


class TestGameMove(TestCase):
    def test_legal_directions(self):
        """
        Test if legal directions are correctly identified.
        """
        grid = array([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertEqual(set(legal_directions(grid)), {Direction.UP, Direction.DOWN, Direction.RIGHT})

    def test_mask_covers_every_direction(self):
        """
        Test that the mask has one entry per direction.
        """
        mask = legal_directions_mask(np.zeros((4, 4), dtype=np.int64))
        self.assertEqual(set(mask), set(Direction))
        self.assertFalse(any(mask.values()))

    def test_mask_matches_simulated_moves(self):
        """
        Test that a direction is legal exactly when moving that way changes the grid.
        """
        rng = np.random.default_rng(17)
        engine = GridEngine(seed=0)
        for _ in range(300):
            grid = rng.choice([0, 2, 4, 8], size=(4, 4))
            mask = legal_directions_mask(grid)
            for direction in Direction:
                engine.load_grid(grid)
                self.assertEqual(engine.move(direction).moved, mask[direction], msg=f'{direction}:\n{grid}')

    def test_heuristic_is_exact_on_full_grids(self):
        """
        Test that "empty cell or equal neighbours" agrees with "some move changes the grid".
        """
        rng = np.random.default_rng(29)
        blocked = 0
        for _ in range(5000):
            grid = 2 ** rng.integers(1, 12, size=(4, 4))
            self.assertEqual(has_possible_moves(grid), bool(legal_directions(grid)), msg=f'\n{grid}')
            blocked += not has_possible_moves(grid)
        # ##>: The sample must contain blocked grids for the check to mean anything.
        self.assertGreater(blocked, 0)

    def test_empty_cell_is_a_move(self):
        """
        Test that any empty cell leaves a move.
        """
        grid = array([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 0]])
        self.assertTrue(has_possible_moves(grid))
        grid[3, 3] = 2
        self.assertFalse(has_possible_moves(grid))


if __name__ == '__main__':
    main()
