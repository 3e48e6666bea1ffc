"""Tests for logging configuration."""

import json
import logging
import sys

import pytest
from pydantic import ValidationError
from crccheck.common.logging import (
    DetailedFormatter,
    SimpleFormatter,
    StructuredFormatter,
    setup_logging,
)
from crccheck.common.logging_config import LoggingConfig


class TestLoggingConfig:
    """Test LoggingConfig validation."""

    def test_valid_config(self):
        """Test valid logging configuration."""
        config = LoggingConfig(level="INFO", format="json")
        assert config.level == "INFO"
        assert config.format == "json"

    def test_default_values(self):
        """Test default values keep the console quiet."""
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert config.format == "simple"
        assert config.file is None

    def test_rejects_invalid_log_level(self):
        """Test that invalid log levels are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")

        with pytest.raises(ValidationError):
            LoggingConfig(level="CRITICAL")

    def test_rejects_invalid_format(self):
        """Test that invalid formats are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(format="xml")

    def test_rejects_unknown_fields(self):
        """Test that typos in config keys are reported."""
        with pytest.raises(ValidationError):
            LoggingConfig(levl="INFO")

    def test_case_insensitive_log_level(self):
        """Test that log level is case-insensitive."""
        assert LoggingConfig(level="info").level == "INFO"
        assert LoggingConfig(level="Debug").level == "DEBUG"

    def test_case_insensitive_format(self):
        """Test that format is case-insensitive."""
        assert LoggingConfig(format="JSON").format == "json"
        assert LoggingConfig(format="Detailed").format == "detailed"

    def test_serialization(self):
        """Test that config can be serialized."""
        config = LoggingConfig(level="DEBUG", format="detailed")

        assert config.model_dump() == {
            "level": "DEBUG",
            "format": "detailed",
            "file": None,
        }


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.parametrize("format_name, formatter_class", [
        ("simple", SimpleFormatter),
        ("detailed", DetailedFormatter),
        ("json", StructuredFormatter),
    ])
    def test_console_formatter(self, restore_root_logger, format_name, formatter_class):
        """Test that the format name selects the console formatter."""
        setup_logging(level="INFO", format=format_name)

        assert restore_root_logger.level == logging.INFO
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, formatter_class)

    def test_log_file_handler(self, restore_root_logger, tmp_path):
        """Test that a log file gets a structured rotating handler."""
        log_file = tmp_path / "logs" / "crccheck.log"

        setup_logging(level="DEBUG", log_file=log_file)

        assert log_file.parent.is_dir()
        assert len(restore_root_logger.handlers) == 2
        assert isinstance(restore_root_logger.handlers[1].formatter, StructuredFormatter)

        for handler in restore_root_logger.handlers[1:]:
            handler.close()


class TestStructuredFormatter:
    """Tests for the JSON formatter."""

    def test_formats_record_as_json(self):
        """Test the emitted JSON fields."""
        record = logging.LogRecord(
            name="crccheck.test", level=logging.WARNING, pathname=__file__,
            lineno=10, msg="Cannot read %s", args=("a.bin",), exc_info=None,
        )

        data = json.loads(StructuredFormatter().format(record))

        assert data["level"] == "WARNING"
        assert data["logger"] == "crccheck.test"
        assert data["message"] == "Cannot read a.bin"
        assert "exception" not in data

    def test_includes_exception(self):
        """Test that exception info is serialized."""
        try:
            raise FileNotFoundError("missing")
        except FileNotFoundError:
            record = logging.LogRecord(
                name="crccheck.test", level=logging.ERROR, pathname=__file__,
                lineno=10, msg="failed", args=(), exc_info=sys.exc_info(),
            )

        data = json.loads(StructuredFormatter().format(record))

        assert data["exception"]["type"] == "FileNotFoundError"
        assert data["exception"]["message"] == "missing"
