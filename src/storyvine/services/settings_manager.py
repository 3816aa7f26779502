"""Settings Manager - Handles backend selection and runtime configuration."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_BACKEND = "sqlite"
DEFAULT_DB_NAME = "storyvine.db"
DEFAULT_LOG_LEVEL = "INFO"


class SettingsManager:
    """
    Manages settings read from the environment.

    Values come from the process environment, seeded from the .env file in
    the project root. Blank values are treated as unset.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_backend(self) -> str:
        """Get the backend kind: "sqlite" or "rest"."""
        return (self._get("STORYVINE_BACKEND") or DEFAULT_BACKEND).lower()

    def get_database_path(self) -> Path:
        """Get the SQLite database path for the local backend."""
        value = self._get("STORYVINE_DB_PATH")
        return Path(value) if value else self._project_root / DEFAULT_DB_NAME

    def get_api_url(self) -> Optional[str]:
        return self._get("STORYVINE_API_URL")

    def get_api_key(self) -> Optional[str]:
        return self._get("STORYVINE_API_KEY")

    def get_log_level(self) -> str:
        return (self._get("STORYVINE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()

    def get_current_user_id(self) -> Optional[str]:
        """Get the user signed in at startup (development sign-in)."""
        return self._get("STORYVINE_USER_ID")

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)

    @staticmethod
    def _get(name: str) -> Optional[str]:
        value = os.getenv(name)
        return value.strip() if value and value.strip() else None
