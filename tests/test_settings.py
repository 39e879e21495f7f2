import logging

import pytest
from pydantic import ValidationError

from settings import get_logger, load_settings


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DSAVIZ_PORT", "8123")
    monkeypatch.setenv("DSAVIZ_DEFAULT_SPEED", "slow")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    load_settings.cache_clear()

    cfg = load_settings()
    assert cfg.port == 8123
    assert cfg.default_speed == "slow"
    assert cfg.log_level_numeric() == logging.DEBUG


def test_test_environment_is_detected():
    cfg = load_settings()
    assert cfg.is_test
    assert not cfg.is_dev


def test_invalid_values_are_rejected(monkeypatch):
    monkeypatch.setenv("DSAVIZ_DEFAULT_SPEED", "warp")
    load_settings.cache_clear()
    with pytest.raises(ValidationError):
        load_settings()


def test_secret_key_is_random_when_unset(monkeypatch):
    monkeypatch.delenv("DSAVIZ_SECRET_KEY", raising=False)
    first = load_settings().secret_key
    load_settings.cache_clear()
    assert load_settings().secret_key != first


def test_named_logger_has_one_handler():
    log = get_logger("dsaviz.test")
    get_logger("dsaviz.test")
    assert len(log.handlers) == 1
    assert log.propagate is False
