"""
Vectorised move checks on a grid, used for terminal-state detection.
"""

from numpy import any as np_any
from numpy import ndarray

from merge2048.core.models import Direction


def has_possible_moves(grid: ndarray) -> bool:
    """
    Check whether the player still has a move.

    Parameters
    ----------
    grid : ndarray
        The game grid, ``0`` for empty cells.

    Returns
    -------
    bool
        True if an empty cell exists or two horizontally / vertically adjacent cells hold the same value.

    Notes
    -----
    Adjacency is necessary and sufficient for a merge, so on a full grid this check agrees with
    ``legal_directions(grid) != []``.
    """
    if not grid.all():
        return True
    return bool(np_any(grid[:-1] == grid[1:]) or np_any(grid[:, :-1] == grid[:, 1:]))


def legal_directions_mask(grid: ndarray) -> dict[Direction, bool]:
    """
    Compute, for every direction, whether a move would change the grid.

    Parameters
    ----------
    grid : ndarray
        The game grid, ``0`` for empty cells.

    Returns
    -------
    dict[Direction, bool]
        Mapping from each direction to True when the move is legal.

    Notes
    -----
    Horizontal and vertical adjacencies are computed once, then the slide condition
    (an empty cell in front of a tile) is checked per direction.
    """
    # ##>: Compute horizontal adjacency once for left/right.
    left_cols, right_cols = grid[:, :-1], grid[:, 1:]
    h_can_merge = (left_cols != 0) & (left_cols == right_cols)

    # ##>: Compute vertical adjacency once for up/down.
    top_rows, bottom_rows = grid[:-1, :], grid[1:, :]
    v_can_merge = (top_rows != 0) & (top_rows == bottom_rows)

    # ##>: Check slide conditions per direction.
    left = (left_cols == 0) & (right_cols != 0)
    right = (right_cols == 0) & (left_cols != 0)
    up = (top_rows == 0) & (bottom_rows != 0)
    down = (bottom_rows == 0) & (top_rows != 0)

    return {
        Direction.UP: bool(up.any() or v_can_merge.any()),
        Direction.DOWN: bool(down.any() or v_can_merge.any()),
        Direction.LEFT: bool(left.any() or h_can_merge.any()),
        Direction.RIGHT: bool(right.any() or h_can_merge.any()),
    }


def legal_directions(grid: ndarray) -> list[Direction]:
    """
    List the directions in which a move would change the grid.

    Parameters
    ----------
    grid : ndarray
        The game grid.

    Returns
    -------
    list[Direction]
        Legal directions, in ``Direction`` declaration order.
    """
    mask = legal_directions_mask(grid)
    return [direction for direction in Direction if mask[direction]]
