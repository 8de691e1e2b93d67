"""
Translation of keyboard and pointer gestures into move directions.
"""

from merge2048.core.models import Direction

# ##: Key names as reported by matplotlib key events.
KEY_DIRECTIONS: dict[str, Direction] = {
    'up': Direction.UP,
    'down': Direction.DOWN,
    'left': Direction.LEFT,
    'right': Direction.RIGHT,
}


def key_direction(key: str | None) -> Direction | None:
    """
    Map an arrow key to its direction.

    Parameters
    ----------
    key : str | None
        Key name, e.g. ``"left"``.

    Returns
    -------
    Direction | None
        The direction, or None for any other key.
    """
    if key is None:
        return None
    return KEY_DIRECTIONS.get(key.lower())


def swipe_direction(d_x: float, d_y: float, threshold: float = 20.0) -> Direction | None:
    """
    Map a drag displacement to a direction.

    Parameters
    ----------
    d_x : float
        Horizontal displacement, positive to the right.
    d_y : float
        Vertical displacement, positive downwards (screen coordinates).
    threshold : float, optional
        Minimum displacement on one of the axes (default is 20).

    Returns
    -------
    Direction | None
        Direction along the axis with the larger displacement, or None when the drag is too short.
    """
    if abs(d_x) <= threshold and abs(d_y) <= threshold:
        return None
    if abs(d_x) > abs(d_y):
        return Direction.RIGHT if d_x > 0 else Direction.LEFT
    return Direction.DOWN if d_y > 0 else Direction.UP
