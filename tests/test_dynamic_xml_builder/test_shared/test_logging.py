"""Tests for structured logging utilities."""

import logging

import pytest

from dynamic_xml_builder.shared.logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)


class TestCorrelationLogger:
    """Test correlation-aware logging."""

    def test_component_defaults_to_module_name(self):
        logger = CorrelationLogger("dynamic_xml_builder.builder.engine")
        assert logger.component == "engine"

    def test_records_carry_extra(self, caplog):
        """Test that component and correlation ID reach the log record."""
        logger = get_logger("dynamic_xml_builder.test", "run-7", "tests")

        with caplog.at_level(logging.DEBUG, logger="dynamic_xml_builder.test"):
            logger.debug("hello", extra={"tag": "feed"})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "tests"
        assert record.correlation_id == "run-7"
        assert record.tag == "feed"

    def test_debug_skipped_when_disabled(self, caplog):
        logger = get_logger("dynamic_xml_builder.quiet")

        with caplog.at_level(logging.INFO, logger="dynamic_xml_builder.quiet"):
            logger.debug("hidden")
            logger.warning("shown")

        assert [r.getMessage() for r in caplog.records] == ["shown"]


class TestConfigureLogging:
    """Test root logging setup."""

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")

    def test_accepts_lowercase_level(self):
        configure_logging("warning")
