"""Settings, logging configuration and store selection."""

import pytest
from pydantic import ValidationError

from licensegate.config import Settings
from licensegate.infrastructure.persistence.store import build_store
from licensegate.log_config import get_logging_config


def test_settings_defaults(monkeypatch) -> None:
    for name in ("STORAGE_BACKEND", "ADMIN_KEY", "ROOT_ACTOR_ID", "DENY_PAUSED_APPROVALS"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "postgres"
    assert settings.admin_key == ""
    assert settings.root_actor_id == ""
    assert settings.deny_paused_approvals is False
    assert settings.store_timeout_seconds == 5.0


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("ROOT_ACTOR_ID", "root-1")
    monkeypatch.setenv("DENY_PAUSED_APPROVALS", "true")
    monkeypatch.setenv("STORE_TIMEOUT_SECONDS", "1.5")
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "file"
    assert settings.root_actor_id == "root-1"
    assert settings.deny_paused_approvals is True
    assert settings.store_timeout_seconds == 1.5


def test_settings_reject_bad_values(monkeypatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("STORE_TIMEOUT_SECONDS", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_build_store_without_pool(tmp_path) -> None:
    memory = build_store(Settings(_env_file=None, storage_backend="memory"))
    assert memory.pool is None

    file_store = build_store(
        Settings(
            _env_file=None,
            storage_backend="file",
            storage_path=str(tmp_path / "store.json"),
        )
    )
    assert file_store.pool is None
    assert callable(file_store.uow_factory)
    assert not (tmp_path / "store.json").exists()


def test_logging_config_text() -> None:
    config = get_logging_config("debug", "text")
    assert config["root"]["level"] == "DEBUG"
    assert config["handlers"]["console"]["formatter"] == "text"


def test_logging_config_json() -> None:
    config = get_logging_config("INFO", "json")
    assert config["handlers"]["console"]["formatter"] == "json"
    assert config["formatters"]["json"]["()"] == "pythonjsonlogger.json.JsonFormatter"
