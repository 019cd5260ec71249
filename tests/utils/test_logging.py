# tests/utils/test_logging.py
"""Tests for logging setup and the JSON formatter."""

import json
import logging

import pytest

from plancompare.utils.logging import JsonFormatter, _get_log_level, setup_logging


@pytest.fixture
def restore_root_logger():
    """setup_logging() replaces root handlers; put them back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def make_record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="plancompare.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Fetched %d NAVs",
            args=(3,),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_core_fields(self):
        entry = json.loads(JsonFormatter().format(self.make_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "plancompare.test"
        assert entry["message"] == "Fetched 3 NAVs"
        assert "timestamp" in entry
        assert "extra" not in entry

    def test_extra_fields(self):
        entry = json.loads(JsonFormatter().format(self.make_record(scheme_code="119551")))

        assert entry["extra"] == {"scheme_code": "119551"}

    def test_non_serializable_extra_stringified(self):
        entry = json.loads(JsonFormatter().format(self.make_record(payload={1, 2})))

        assert isinstance(entry["extra"]["payload"], str)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_configures_root(self, restore_root_logger):
        setup_logging(level="DEBUG", log_format="json")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_text_format(self, restore_root_logger):
        setup_logging(level="warning", log_format="text")

        assert restore_root_logger.level == logging.WARNING
        assert not isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            _get_log_level("LOUD")
