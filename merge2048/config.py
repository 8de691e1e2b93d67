"""
Configuration of the game and of its animations.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AnimationConfig:
    """
    Timings of the move animation, in seconds.
    """

    move_duration: float = 0.14  # Slide phase
    pop_duration: float = 0.16  # Merge pop phase
    pop_scale: float = 0.28  # Peak extra scale of a merged tile
    frame_interval: float = 0.016  # Delay between two frames (~60 fps)


@dataclass
class GameConfig:
    """
    Configuration of a game window.
    """

    size: int = 4  # Grid side
    win_value: int = 2048  # Tile that wins the game
    start_tiles: int = 2  # Tiles placed on a new game
    difficulty: str = 'normal'
    theme: str = 'classic'
    swipe_threshold: float = 20.0  # Minimum drag, in pixels, to count as a swipe
    animation: AnimationConfig = field(default_factory=AnimationConfig)


def default_config() -> GameConfig:
    """
    Create the default configuration: 4x4 grid, normal difficulty, classic theme.

    Returns
    -------
    GameConfig
        Default configuration.
    """
    return GameConfig()


def instant_config() -> GameConfig:
    """
    Create a configuration without animation delays.

    Returns
    -------
    GameConfig
        Configuration whose animation phases complete on their first frame.
    """
    return GameConfig(animation=AnimationConfig(move_duration=0.0, pop_duration=0.0, frame_interval=0.0))
