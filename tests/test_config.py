import json
import logging

import pytest

from config import Config
from utils.logging import JSONFormatter, setup_logging


def test_defaults(monkeypatch):
    for var in ("MEDTRACK_TIMEZONE", "MEDTRACK_LOG_FORMAT", "MEDTRACK_LOG_LEVEL", "MEDTRACK_ALLOW_FUTURE_DOSES"):
        monkeypatch.delenv(var, raising=False)
    cfg = Config.from_env()
    assert cfg == Config()
    assert cfg.timezone == "America/Chicago"
    assert cfg.allow_future_doses is False


def test_from_env(monkeypatch):
    monkeypatch.setenv("MEDTRACK_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("MEDTRACK_LOG_FORMAT", "JSON")
    monkeypatch.setenv("MEDTRACK_LOG_LEVEL", "debug")
    monkeypatch.setenv("MEDTRACK_ALLOW_FUTURE_DOSES", "true")
    cfg = Config.from_env()
    assert cfg.timezone == "Europe/Berlin"
    assert cfg.log_format == "json"
    assert cfg.log_level == logging.DEBUG
    assert cfg.allow_future_doses is True


@pytest.mark.parametrize("var,value", [
    ("MEDTRACK_TIMEZONE", "Mars/Olympus"),
    ("MEDTRACK_LOG_FORMAT", "xml"),
    ("MEDTRACK_LOG_LEVEL", "LOUD"),
])
def test_invalid_env(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(RuntimeError):
        Config.from_env()


def test_json_formatter_includes_medtrack_extras():
    record = logging.LogRecord("models.store", logging.INFO, __file__, 1, "Added %s", ("Aspirin",), None)
    record.medtrack_medication_id = 3
    record.other = "dropped"
    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "Added Aspirin"
    assert entry["level"] == "INFO"
    assert entry["medtrack_medication_id"] == 3
    assert "other" not in entry


def test_setup_logging_replaces_handlers():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        setup_logging("json")
        setup_logging("json", logging.DEBUG)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
