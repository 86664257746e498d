"""Tests for geoqc logging utilities."""

import json
import logging

import pytest

from geoqc.lib.observability import JSONFormatter, setup_logging


def _record(msg="Test message", args=(), exc_info=None):
    return logging.LogRecord(
        name="geoqc.lib.engine",
        level=logging.INFO,
        pathname="/test/file.py",
        lineno=42,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


class TestJSONFormatter:
    """Tests for JSONFormatter class."""

    def test_basic_format(self):
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "geoqc.lib.engine"
        assert data["message"] == "Test message"
        assert data["timestamp"].endswith("Z")

    def test_format_with_args(self):
        data = json.loads(JSONFormatter().format(_record("Validated %d columns", (12,))))

        assert data["message"] == "Validated 12 columns"

    def test_format_with_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            record = _record(exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in data["exception"]

    def test_extra_fields_at_top_level(self):
        record = _record()
        record.table_id = "ROADS"
        record.error_count = 2

        data = json.loads(JSONFormatter().format(record))

        assert data["table_id"] == "ROADS"
        assert data["error_count"] == 2

    def test_extra_cannot_replace_core_keys(self):
        record = _record()
        record.level = "shadow"

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"

    def test_record_attributes_not_repeated(self):
        data = json.loads(JSONFormatter().format(_record()))

        assert "pathname" not in data
        assert "args" not in data

    def test_non_ascii_message(self):
        data = json.loads(JSONFormatter().format(_record("도로 ✓")))

        assert data["message"] == "도로 ✓"


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_default_level(self):
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_verbose(self):
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_level_name(self):
        setup_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_invalid_level_falls_back_to_info(self):
        setup_logging(level="chatty")
        assert logging.getLogger().level == logging.INFO

    def test_json_formatter(self):
        setup_logging(json_format=True)
        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_single_console_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "geoqc.log"
        setup_logging(log_file=str(log_file))

        logging.getLogger("geoqc.test").info("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "written to file" in log_file.read_text(encoding="utf-8")
