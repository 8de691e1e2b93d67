"""
Difficulty profiles: probability of spawning a 4 and score bonus multiplier.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class DifficultyProfile:
    """
    Numeric parameters of a difficulty level.

    Parameters
    ----------
    four_spawn_probability : float
        Probability that a spawned tile is a 4 instead of a 2, in [0, 1].
    score_bonus_multiplier : float
        Factor applied to the raw merge sum of a move, strictly positive.

    Raises
    ------
    ValueError
        If one of the values is out of range.
    """

    four_spawn_probability: float
    score_bonus_multiplier: float

    def __post_init__(self):
        if not 0.0 <= self.four_spawn_probability <= 1.0:
            raise ValueError(f'four_spawn_probability must be in [0, 1], got {self.four_spawn_probability}')
        if self.score_bonus_multiplier <= 0:
            raise ValueError(f'score_bonus_multiplier must be > 0, got {self.score_bonus_multiplier}')


_PROFILES = {
    'easy': DifficultyProfile(four_spawn_probability=0.1, score_bonus_multiplier=1.5),
    'normal': DifficultyProfile(four_spawn_probability=0.2, score_bonus_multiplier=1.0),
    'hard': DifficultyProfile(four_spawn_probability=0.3, score_bonus_multiplier=0.8),
}


class Difficulty(str, Enum):
    """Closed set of selectable difficulties."""

    EASY = 'easy'
    NORMAL = 'normal'
    HARD = 'hard'

    @property
    def profile(self) -> DifficultyProfile:
        """Numeric profile of the difficulty."""
        return _PROFILES[self.value]

    @classmethod
    def from_name(cls, name: 'str | Difficulty') -> 'Difficulty':
        """
        Resolve a difficulty by name.

        Parameters
        ----------
        name : str | Difficulty
            Name of the difficulty, case-insensitive.

        Returns
        -------
        Difficulty
            The matching member.

        Raises
        ------
        ValueError
            If the name is not one of ``easy``, ``normal`` or ``hard``.
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            choices = ', '.join(member.value for member in cls)
            raise ValueError(f'Unknown difficulty {name!r}, expected one of: {choices}') from None
