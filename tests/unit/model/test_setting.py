"""Tests for Settings and the settings singleton."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from statetable.model import Settings, get_settings, reload_settings, strict_decode_enabled


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    for key in ("STATETABLE_LOG_LEVEL", "STATETABLE_LOG_FILE", "STATETABLE_STRICT_DECODE", "STATETABLE_ENV_FILE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # Restore the environment first, the singleton is rebuilt from it
    monkeypatch.undo()
    reload_settings()


def test_defaults() -> None:
    settings = Settings()

    assert settings.log_level == "INFO"
    assert settings.log_file is None
    assert settings.strict_decode is False


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATETABLE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("STATETABLE_STRICT_DECODE", "1")

    settings = Settings()
    assert settings.log_level == "DEBUG"
    assert settings.strict_decode is True


def test_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATETABLE_LOG_LEVEL", "LOUD")

    with pytest.raises(ValidationError):
        Settings()


def test_env_file_in_working_directory(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("STATETABLE_LOG_LEVEL=ERROR\n", encoding="utf-8")

    assert Settings().log_level == "ERROR"


def test_env_file_from_variable(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("STATETABLE_LOG_FILE=/tmp/statetable.log\n", encoding="utf-8")
    monkeypatch.setenv("STATETABLE_ENV_FILE", str(env_file))

    assert Settings().log_file == "/tmp/statetable.log"


def test_singleton() -> None:
    first = reload_settings()

    assert get_settings() is first
    assert get_settings() is get_settings()
    assert reload_settings() is not first


def test_invalid_log_level_fails_reload(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATETABLE_LOG_LEVEL", "LOUD")

    with pytest.raises(ValidationError):
        reload_settings()


def test_strict_decode_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATETABLE_STRICT_DECODE", "1")
    reload_settings()

    assert strict_decode_enabled() is True


def test_strict_decode_read_alone_when_settings_invalid(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("statetable.model.setting._settings", None)
    monkeypatch.setenv("STATETABLE_LOG_LEVEL", "LOUD")

    assert strict_decode_enabled() is False

    monkeypatch.setenv("STATETABLE_STRICT_DECODE", "yes")
    assert strict_decode_enabled() is True


def test_strict_decode_malformed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("statetable.model.setting._settings", None)
    monkeypatch.setenv("STATETABLE_STRICT_DECODE", "maybe")

    with pytest.raises(ValidationError):
        strict_decode_enabled()
