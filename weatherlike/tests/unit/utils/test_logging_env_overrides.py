from __future__ import annotations

import logging

import pytest

from weatherlike.utils import logging as logging_utils


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("WEATHERLIKE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("WEATHERLIKE_DEBUG", raising=False)
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_saved_preference_controls_level_without_env():
    assert logging_utils.apply_saved_preferences(True) == logging.DEBUG
    assert logging_utils.apply_saved_preferences(False) == logging.INFO
    assert logging_utils.env_requests_debug() is False


def test_explicit_level_env_wins(monkeypatch):
    monkeypatch.setenv("WEATHERLIKE_LOG_LEVEL", "warning")

    assert logging_utils.apply_saved_preferences(True) == logging.WARNING
    assert logging_utils.configure_root() == logging.WARNING


def test_debug_flag_forces_debug(monkeypatch):
    monkeypatch.setenv("WEATHERLIKE_DEBUG", "yes")

    assert logging_utils.env_requests_debug() is True
    assert logging_utils.apply_saved_preferences(False) == logging.DEBUG


def test_numeric_and_unknown_levels(monkeypatch):
    monkeypatch.setenv("WEATHERLIKE_LOG_LEVEL", "15")
    assert logging_utils.configure_root() == 15

    monkeypatch.setenv("WEATHERLIKE_LOG_LEVEL", "chatty")
    assert logging_utils.configure_root() == logging.INFO


def test_explicit_environ_mapping_is_used():
    environ = {"WEATHERLIKE_LOG_LEVEL": "error"}

    assert logging_utils.env_level(environ) == logging.ERROR
    assert logging_utils.env_level({}) is None
    assert logging_utils.env_requests_debug({"WEATHERLIKE_DEBUG": "on"}) is True


def test_transport_logger_quieted_outside_debug():
    logging_utils.apply_saved_preferences(False, environ={})

    assert logging.getLogger("urllib3").level == logging.WARNING
