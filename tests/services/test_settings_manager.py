"""Unit tests for SettingsManager."""

import os
import tempfile
from pathlib import Path

import pytest

from storyvine.services import SettingsManager

VARIABLES = (
    "STORYVINE_BACKEND",
    "STORYVINE_DB_PATH",
    "STORYVINE_API_URL",
    "STORYVINE_API_KEY",
    "STORYVINE_LOG_LEVEL",
    "STORYVINE_USER_ID",
)


@pytest.fixture
def temp_env_dir():
    """Provide a temporary directory for .env files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env():
    """Clean up StoryVine variables from environment before and after test."""
    saved = {name: os.environ.pop(name, None) for name in VARIABLES}
    yield
    for name, value in saved.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)


class TestSettingsManagerDefaults:
    """Defaults apply when nothing is configured."""

    def test_defaults_without_env_file(self, temp_env_dir, clean_env):
        settings = SettingsManager(project_root=temp_env_dir)

        assert settings.get_backend() == "sqlite"
        assert settings.get_database_path() == temp_env_dir / "storyvine.db"
        assert settings.get_api_url() is None
        assert settings.get_api_key() is None
        assert settings.get_log_level() == "INFO"
        assert settings.get_current_user_id() is None

    def test_blank_values_treated_as_unset(self, temp_env_dir, clean_env):
        (temp_env_dir / ".env").write_text("STORYVINE_API_KEY=   \nSTORYVINE_BACKEND=\n")

        settings = SettingsManager(project_root=temp_env_dir)

        assert settings.get_api_key() is None
        assert settings.get_backend() == "sqlite"


class TestSettingsManagerFromEnvFile:
    """Values are read from the project's .env file."""

    def test_reads_backend_configuration(self, temp_env_dir, clean_env):
        (temp_env_dir / ".env").write_text(
            "STORYVINE_BACKEND=REST\n"
            "STORYVINE_API_URL=https://project.example.co\n"
            "STORYVINE_API_KEY=  anon-key  \n"
            "STORYVINE_LOG_LEVEL=debug\n"
            "STORYVINE_USER_ID=writer-1\n"
        )

        settings = SettingsManager(project_root=temp_env_dir)

        assert settings.get_backend() == "rest"
        assert settings.get_api_url() == "https://project.example.co"
        assert settings.get_api_key() == "anon-key"
        assert settings.get_log_level() == "DEBUG"
        assert settings.get_current_user_id() == "writer-1"

    def test_database_path_override(self, temp_env_dir, clean_env):
        db_path = temp_env_dir / "data" / "local.db"
        (temp_env_dir / ".env").write_text(f"STORYVINE_DB_PATH={db_path}\n")

        settings = SettingsManager(project_root=temp_env_dir)

        assert settings.get_database_path() == db_path

    def test_process_environment_wins_over_env_file(self, temp_env_dir, clean_env):
        (temp_env_dir / ".env").write_text("STORYVINE_USER_ID=from-file\n")
        os.environ["STORYVINE_USER_ID"] = "from-process"

        settings = SettingsManager(project_root=temp_env_dir)

        assert settings.get_current_user_id() == "from-process"

    def test_reload_env_picks_up_changes(self, temp_env_dir, clean_env):
        env_file = temp_env_dir / ".env"
        env_file.write_text("STORYVINE_USER_ID=old-user\n")

        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_current_user_id() == "old-user"

        env_file.write_text("STORYVINE_USER_ID=new-user\n")
        settings.reload_env()
        assert settings.get_current_user_id() == "new-user"
