"""Unit tests for application settings configuration."""

from pathlib import Path

from worktracker.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_storage_defaults():
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "file"
    assert settings.entries_key == "painter_entries_v1"
    assert settings.id_strategy == "uuid"


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "database")
    monkeypatch.setenv("ENTRIES_KEY", "custom_key")
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "database"
    assert settings.entries_key == "custom_key"
