"""Where the user's settings file lives and how a broken one is recovered."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .config import AppConfig

logger = logging.getLogger(__name__)

APP_DIR_NAME = "neuroimage_insight"
SETTINGS_FILENAME = "settings.yaml"
INVALID_SUFFIX = ".invalid"


class SettingsStore:
    """Reads and writes the :class:`AppConfig` kept in the user's config directory.

    A missing file means defaults. A file that cannot be parsed or validated
    is an error for :meth:`load`; :meth:`load_or_default` instead moves it
    aside and starts from defaults, which is what the CLI and GUI use on
    startup.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def invalid_path(self) -> Path:
        return self._path.with_name(self._path.name + INVALID_SUFFIX)

    def load(self) -> AppConfig:
        if not self._path.exists():
            logger.debug("No settings file at %s; using defaults.", self._path)
            return AppConfig()
        config = AppConfig.load(self._path)
        logger.debug("Loaded settings from %s (endpoint %s)", self._path, config.endpoint_url)
        return config

    def load_or_default(self) -> AppConfig:
        try:
            return self.load()
        except ValueError as exc:
            backup = self._set_aside()
            logger.warning(
                "Ignoring unreadable settings file %s (kept as %s): %s",
                self._path,
                backup,
                exc,
            )
            return AppConfig()

    def save(self, config: AppConfig) -> None:
        config.save(self._path)
        logger.info("Saved settings to %s", self._path)

    def _set_aside(self) -> Path | None:
        # Replaces any earlier copy so only the latest broken file is kept.
        backup = self.invalid_path
        try:
            self._path.replace(backup)
        except OSError as exc:
            logger.warning("Failed to move %s to %s: %s", self._path, backup, exc)
            return None
        return backup


def default_settings_path() -> Path:
    if os.name == "nt":
        base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base.expanduser() / APP_DIR_NAME / SETTINGS_FILENAME
