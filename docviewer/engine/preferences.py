"""Persisted viewer preference (light/dark theme)."""

import json
import logging
from pathlib import Path
from typing import Protocol

from ..models.enums import Theme

logger = logging.getLogger(__name__)

THEME_KEY = "theme"


class PreferenceStore(Protocol):
    def read_theme(self) -> Theme: ...

    def write_theme(self, theme: Theme) -> None: ...


class MemoryPreferenceStore:
    """Preference held for the lifetime of one viewer."""

    def __init__(self, theme: Theme = Theme.LIGHT):
        self._theme = theme

    def read_theme(self) -> Theme:
        return self._theme

    def write_theme(self, theme: Theme) -> None:
        self._theme = theme


class JsonPreferenceStore:
    """Preference persisted as a small JSON document on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read_theme(self) -> Theme:
        if not self.path.exists():
            return Theme.LIGHT
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Theme(data.get(THEME_KEY, Theme.LIGHT))
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable preferences at {self.path}: {e}")
            return Theme.LIGHT

    def write_theme(self, theme: Theme) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({THEME_KEY: theme.value}), encoding="utf-8")
