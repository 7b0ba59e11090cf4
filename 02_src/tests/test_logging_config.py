"""Tests for logging configuration."""

import json
import logging
import logging.handlers
import sys

import pytest

from txguard.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture
def restore_root_logging():
    """Remove the handlers setup_logging() installed on the root logger."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, logging.handlers.QueueHandler) or isinstance(
            handler.formatter, JSONFormatter
        ):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self):
        """Test the structured fields."""
        record = logging.LogRecord(
            "txguard.test", logging.ERROR, __file__, 10, "hello %s", ("world",), None
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "ERROR"
        assert data["logger"] == "txguard.test"
        assert data["message"] == "hello world"
        assert data["line"] == 10
        assert "timestamp" in data

    def test_context_extra(self):
        """Test that context extras are emitted, with non-JSON values repr'd."""
        record = logging.LogRecord(
            "txguard.test", logging.ERROR, __file__, 1, "v", (), None
        )
        record.context = {"kind": "rpc_client_call", "manager": object()}

        data = json.loads(JSONFormatter().format(record))

        assert data["context"]["kind"] == "rpc_client_call"
        assert data["context"]["manager"].startswith("<object object")

    def test_exception(self):
        """Test exception formatting."""
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord(
                "txguard.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError: bad" in data["exception"]


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_writes_json_file(self, tmp_path, restore_root_logging):
        """Test that records reach the rotating file as JSON."""
        log_file = tmp_path / "logs" / "txguard.log"

        listener = setup_logging(log_level="INFO", log_file=str(log_file))
        get_logger("txguard.test").info("written")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert listener is None
        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        assert json.loads(lines[-1])["message"] == "written"

    def test_queue_mode(self, tmp_path, restore_root_logging):
        """Test that queue mode routes records through a listener."""
        log_file = tmp_path / "txguard.log"

        listener = setup_logging(log_level="INFO", log_file=str(log_file), use_queue=True)
        try:
            assert isinstance(logging.getLogger().handlers[0], logging.handlers.QueueHandler)
            get_logger("txguard.test").error("queued")
        finally:
            listener.stop()
        for handler in listener.handlers:
            handler.flush()
            handler.close()

        assert "queued" in log_file.read_text(encoding="utf-8")
