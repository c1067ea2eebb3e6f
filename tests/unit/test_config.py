"""
Unit tests for settings loading and logging setup.
"""

import json
import logging

import json_log_formatter
import pydantic
import pytest

from admindash.config import Settings
from admindash.main import build_settings, parse_args, setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def test_defaults():
    settings = Settings()

    assert settings.default_page == 1
    assert settings.default_limit == 10
    assert settings.max_limit == 100
    assert settings.dashboard_limit == 100
    assert settings.seed_data is True
    assert settings.log_format == "text"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ADMINDASH_MAX_LIMIT", "50")
    monkeypatch.setenv("ADMINDASH_SEED_DATA", "false")

    settings = Settings()

    assert settings.max_limit == 50
    assert settings.seed_data is False


def test_cli_overrides_env(monkeypatch):
    monkeypatch.setenv("ADMINDASH_PORT", "9000")

    settings = build_settings(parse_args(["--port", "9100", "--no-seed"]))

    assert settings.port == 9100
    assert settings.seed_data is False


def test_unknown_log_format_rejected(monkeypatch):
    with pytest.raises(pydantic.ValidationError):
        Settings(log_format="xml")

    monkeypatch.setenv("ADMINDASH_LOG_FORMAT", "JSON ")
    with pytest.raises(pydantic.ValidationError):
        Settings()


def test_setup_logging_installs_single_handler(root_logger):
    setup_logging(Settings(log_level="debug", log_format="json"))

    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0].formatter, json_log_formatter.JSONFormatter)


def test_json_log_line_with_quotes_parses(root_logger):
    """Messages with quotes and backslashes still produce valid JSON."""
    setup_logging(Settings(log_format="json"))
    record = logging.getLogger("admindash.api.routes").makeRecord(
        "admindash.api.routes",
        logging.INFO,
        __file__,
        0,
        'listing products search="desk \\ lamp"',
        (),
        None,
    )

    line = root_logger.handlers[0].formatter.format(record)

    assert json.loads(line)["message"] == 'listing products search="desk \\ lamp"'


def test_text_format_is_default(root_logger):
    setup_logging(Settings())

    formatter = root_logger.handlers[0].formatter
    assert not isinstance(formatter, json_log_formatter.JSONFormatter)
    assert formatter._fmt == "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
