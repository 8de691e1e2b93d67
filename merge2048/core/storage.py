"""
Persistence of the best score and of the selected theme.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

_logger = logging.getLogger(__name__)


class SettingsStore(ABC):
    """
    Base class for settings persistence.

    A missing value is never an error: ``load_best_score`` returns 0 and ``load_theme`` returns None.
    """

    @abstractmethod
    def load_best_score(self) -> int:
        """
        Returns the stored best score, 0 when nothing is stored.
        """

    @abstractmethod
    def save_best_score(self, score: int) -> None:
        """
        Stores a new best score.

        Parameters
        ----------
        score: int
            Best score to store
        """

    @abstractmethod
    def load_theme(self) -> str | None:
        """
        Returns the stored theme name, if any.
        """

    @abstractmethod
    def save_theme(self, name: str) -> None:
        """
        Stores the selected theme name.

        Parameters
        ----------
        name: str
            Theme name
        """


class MemoryStore(SettingsStore):
    """Keeps settings for the lifetime of the process only."""

    def __init__(self, best_score: int = 0, theme: str | None = None):
        self.best_score = best_score
        self.theme = theme

    def load_best_score(self) -> int:
        return self.best_score

    def save_best_score(self, score: int) -> None:
        self.best_score = score

    def load_theme(self) -> str | None:
        return self.theme

    def save_theme(self, name: str) -> None:
        self.theme = name


class JsonFileStore(SettingsStore):
    """
    Settings stored in a small JSON document.

    The file looks like ``{"best_score": 1024, "theme": "dark"}``. Read and write failures are logged
    and swallowed so that an unavailable storage never interrupts a game.

    Parameters
    ----------
    path : str | Path
        Location of the JSON file. Parent directories are created on first save.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as error:
            _logger.warning('Could not read settings from %s: %s', self.path, error)
            return {}
        if not isinstance(data, dict):
            _logger.warning('Ignoring malformed settings in %s', self.path)
            return {}
        return data

    def _write(self, **values) -> None:
        data = self._read()
        data.update(values)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding='utf-8')
        except OSError as error:
            _logger.warning('Could not write settings to %s: %s', self.path, error)

    def load_best_score(self) -> int:
        value = self._read().get('best_score', 0)
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            _logger.warning('Ignoring invalid best score %r in %s', value, self.path)
            return 0

    def save_best_score(self, score: int) -> None:
        self._write(best_score=int(score))

    def load_theme(self) -> str | None:
        theme = self._read().get('theme')
        return theme if isinstance(theme, str) else None

    def save_theme(self, name: str) -> None:
        self._write(theme=name)
