import logging

import pytest
from pythonjsonlogger import jsonlogger

from csv_explorer.logging_config import ENV_LOG_FORMAT, ENV_LOG_LEVEL, configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logger(monkeypatch):
    monkeypatch.delenv(ENV_LOG_FORMAT, raising=False)
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_by_default():
    configure_logging()

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
    assert root.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING


def test_plain_format_and_level_from_env(monkeypatch):
    monkeypatch.setenv(ENV_LOG_FORMAT, "PLAIN")
    monkeypatch.setenv(ENV_LOG_LEVEL, "debug")

    configure_logging()

    root = logging.getLogger()
    assert not isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
    assert root.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_force_format_wins_over_env(monkeypatch):
    monkeypatch.setenv(ENV_LOG_FORMAT, "plain")
    configure_logging(level=logging.WARNING, force_format="json")

    root = logging.getLogger()
    assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
    assert root.level == logging.WARNING


def test_unknown_level_raises():
    with pytest.raises(ValueError):
        configure_logging(level="loud")
