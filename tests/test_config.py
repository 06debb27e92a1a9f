"""
Tests for settings and logger setup.
"""

import logging

import pytest
from pydantic import ValidationError

from lemo_validator.utils import Settings, get_settings, log_error, setup_logger


def test_defaults(monkeypatch):
    monkeypatch.delenv("LEMO_VALIDATOR_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LEMO_VALIDATOR_LOG_FILE", raising=False)
    settings = Settings(_env_file=None)

    assert settings.APP_NAME == "Lemo Validator"
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_FILE is None
    assert settings.DEBUG is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LEMO_VALIDATOR_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("lemo_validator_validation_rules_path", "/etc/rules.yaml")

    settings = Settings(_env_file=None)

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.VALIDATION_RULES_PATH == "/etc/rules.yaml"


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv("LEMO_VALIDATOR_LOG_LEVEL", "LOUD")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_setup_logger_configures_once():
    logger = setup_logger("lemo_validator.tests.once")
    setup_logger("lemo_validator.tests.once")

    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def test_log_error(caplog):
    logger = setup_logger("lemo_validator.tests.errors")

    with caplog.at_level(logging.ERROR, logger="lemo_validator.tests.errors"):
        log_error(logger, ValueError("boom"), "Rule failed")

    assert "Rule failed: ValueError: boom" in caplog.text
