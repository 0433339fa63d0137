"""Test Settings and logging configuration."""
import logging

from pydantic import ValidationError
import pytest

from arithmetic_data_server.common.config import Settings
from arithmetic_data_server.common.logger import configure_logging, logger


def test_settings_defaults(monkeypatch) -> None:
    """Without overrides the server binds to localhost:8080."""
    for name in ("ARITHMETIC_HOST", "ARITHMETIC_PORT", "ARITHMETIC_APP_NAME", "ARITHMETIC_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)
    assert settings.host == "127.0.0.1"
    assert settings.port == 8080
    assert settings.app_name == "Arithmetic Data Server"


def test_settings_from_env(monkeypatch) -> None:
    """ARITHMETIC_-prefixed variables override the defaults."""
    monkeypatch.setenv("ARITHMETIC_PORT", "9090")
    monkeypatch.setenv("ARITHMETIC_LOG_LEVEL", "DEBUG")

    settings = Settings(_env_file=None)
    assert settings.port == 9090
    assert settings.log_level == "DEBUG"


def test_settings_invalid_port(monkeypatch) -> None:
    """Ports outside the valid range raise a ValidationError."""
    monkeypatch.setenv("ARITHMETIC_PORT", "70000")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_configure_logging_is_idempotent() -> None:
    """Repeated configuration updates the level without stacking handlers."""
    configure_logging("INFO")
    handler_count = len(logger.handlers)

    configure_logging("debug")
    assert len(logger.handlers) == handler_count
    assert logger.level == logging.DEBUG
