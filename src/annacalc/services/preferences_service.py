import json
import logging
from pathlib import Path
from typing import Dict

from annacalc.config.settings import settings


logger = logging.getLogger(__name__)

THEME_KEY = "theme"
LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)


class PreferencesServiceError(Exception):
    pass


class PreferencesService:
    """Stores the single theme preference in a small JSON file."""

    def __init__(self, path: str, default_theme: str = LIGHT) -> None:
        if default_theme not in THEMES:
            raise PreferencesServiceError(f"Unsupported default theme: {default_theme}")
        self.path = Path(path)
        self.default_theme = default_theme

    @classmethod
    def from_settings(cls) -> "PreferencesService":
        return cls(settings.preferences_path, settings.default_theme)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("preferences_unreadable path=%s err=%s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def load_theme(self) -> str:
        theme = self._read().get(THEME_KEY)
        if theme not in THEMES:
            return self.default_theme
        return theme

    def save_theme(self, theme: str) -> str:
        if theme not in THEMES:
            raise PreferencesServiceError(f"Unsupported theme: {theme}. Use 'light' or 'dark'.")

        data = self._read()
        data[THEME_KEY] = theme
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as exc:
            raise PreferencesServiceError(f"Could not save preferences: {exc}") from exc

        logger.info("theme_saved theme=%s", theme)
        return theme
