"""
Locates the per-user files of the sleep tracker (database, config, log).

Running from a source checkout keeps them in the project root; a frozen
PyInstaller build stores them in the platform's application data folder,
since the bundle directory is read-only or temporary. Setting
SLEEP_TRACKER_HOME overrides both.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import ClassVar, Self

from sleep_tracker_app.core.constants import FileName

DATA_DIR_ENV_VAR = "SLEEP_TRACKER_HOME"


class ResourceResolver:
    """Process-wide resolver for user data paths."""

    APP_NAME: ClassVar[str] = "SleepTrackerApp"

    _instance: ClassVar[ResourceResolver | None] = None
    _frozen: bool
    _data_dir: Path

    def __new__(cls) -> Self:
        """Every caller shares one instance so all paths agree."""
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._frozen = bool(getattr(sys, "frozen", False)) and hasattr(sys, "_MEIPASS")
            instance._data_dir = instance._resolve_data_dir()
            cls._instance = instance
        return cls._instance

    def _resolve_data_dir(self) -> Path:
        override = os.environ.get(DATA_DIR_ENV_VAR)
        if override:
            return Path(override).expanduser()
        if not self._frozen:
            # sleep_tracker_app/utils/resource_resolver.py -> checkout root
            return Path(__file__).resolve().parents[2]
        return self._platform_data_dir()

    def _platform_data_dir(self) -> Path:
        if sys.platform == "win32":
            root = Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
        elif sys.platform == "darwin":
            root = Path.home() / "Library" / "Application Support"
        else:
            root = Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")

        data_dir = root / self.APP_NAME
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def get_user_data_path(self, filename: str) -> Path:
        """Path of ``filename`` inside the user data directory."""
        return self._data_dir / filename

    def get_database_path(self) -> Path:
        return self.get_user_data_path(FileName.SLEEP_TRACKER_DB)

    def get_config_path(self) -> Path:
        return self.get_user_data_path(FileName.CONFIG_JSON)

    def get_log_path(self) -> Path:
        return self.get_user_data_path(FileName.LOG_FILE)

    def is_executable_environment(self) -> bool:
        """True inside a PyInstaller bundle."""
        return self._frozen


resource_resolver = ResourceResolver()


def get_database_path() -> Path:
    return resource_resolver.get_database_path()


def get_config_path() -> Path:
    return resource_resolver.get_config_path()


def get_log_path() -> Path:
    return resource_resolver.get_log_path()
