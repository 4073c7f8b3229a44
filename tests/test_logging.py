"""
tests/test_logging.py — Formatters and handler setup in logging_config
"""
import json
import logging

import pytest

from logging_config import HumanFormatter, JSONFormatter, setup_logging


def _record(msg="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("lalitha.api", level, __file__, 10, msg, (), None, func="view")
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


class TestFormatters:

    def test_json_line(self):
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["msg"] == "hello"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "lalitha.api"
        assert entry["ts"].endswith("Z")
        assert entry["where"].endswith(".view:10")

    def test_json_request_fields(self):
        entry = json.loads(JSONFormatter().format(
            _record(route="/api/sales", method="GET", status=200, duration_ms=12, user="x")))
        assert (entry["route"], entry["method"], entry["status"], entry["duration_ms"]) == \
            ("/api/sales", "GET", 200, 12)
        assert "user" not in entry

    def test_human_request_tag(self):
        line = HumanFormatter(color=False).format(
            _record(route="/api/sales", method="GET", status=200, duration_ms=12))
        assert line.endswith("hello [GET /api/sales 200 12ms]")
        assert " I lalitha.api" in line

    def test_human_color_only_when_asked(self):
        record = _record(level=logging.ERROR)
        assert "\033[" not in HumanFormatter(color=False).format(record)
        assert HumanFormatter(color=True).format(record).startswith("\033[31m")


class TestSetupLogging:

    def test_file_log_is_json(self, tmp_path, monkeypatch, restore_root):
        monkeypatch.delenv("LOG_FILE", raising=False)
        setup_logging(level="debug", json_logs=False, log_dir=str(tmp_path))
        logging.getLogger("lalitha.test").warning("disk check")
        for handler in restore_root.handlers:
            handler.flush()
        lines = (tmp_path / "lalitha.log").read_text().splitlines()
        assert restore_root.level == logging.DEBUG
        assert json.loads(lines[-1])["msg"] == "disk check"

    def test_file_log_can_be_disabled(self, tmp_path, monkeypatch, restore_root):
        monkeypatch.setenv("LOG_FILE", "0")
        setup_logging(log_dir=str(tmp_path))
        assert not (tmp_path / "lalitha.log").exists()
        assert len(restore_root.handlers) == 1

    def test_log_json_env(self, monkeypatch, restore_root):
        monkeypatch.setenv("LOG_JSON", "true")
        monkeypatch.setenv("LOG_FILE", "no")
        setup_logging()
        assert isinstance(restore_root.handlers[0].formatter, JSONFormatter)
