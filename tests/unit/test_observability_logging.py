"""Tests for structured logging helpers."""

import logging
from pathlib import Path

import pytest
import structlog

from structmask import MaskingConfig, StructMasker
from structmask.config import LoggingConfig
from structmask.observability.logging import (
    configure_logging,
    correlation_context,
    correlation_id,
    get_logger,
    trace_operation,
)
from tests.utils.records import CardRecord, ChildRecord


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    package_logger = logging.getLogger("structmask")
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


class TestCorrelationContext:
    def test_sets_and_resets(self) -> None:
        with correlation_context("abc-123") as corr_id:
            assert corr_id == "abc-123"
            assert correlation_id.get() == "abc-123"
        assert correlation_id.get() == ""

    def test_generates_id(self) -> None:
        with correlation_context() as corr_id:
            assert corr_id


class TestTraceOperation:
    def test_disabled_is_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG):
            with trace_operation("op", enabled=False):
                pass

        assert "Operation started" not in caplog.text

    def test_enabled_logs_start_and_completion(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG):
            with trace_operation("op", enabled=True, record_type="Card"):
                pass

        assert "Operation started" in caplog.text
        assert "Operation completed" in caplog.text

    def test_failure_is_logged_and_reraised(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ValueError):
                with trace_operation("op", enabled=True):
                    raise ValueError("boom")

        assert "Operation failed" in caplog.text


class TestEngineLogging:
    def test_unknown_method_is_logged_without_value(self, caplog: pytest.LogCaptureFixture) -> None:
        masker = StructMasker(config=MaskingConfig())

        with caplog.at_level(logging.DEBUG, logger="structmask"):
            result = masker.mask_record(CardRecord(card_number="4111111111111111"))

        assert result.card_number == "4111111111111111"
        assert "Unknown masking method" in caplog.text
        assert "card_number" in caplog.text
        assert "4111111111111111" not in caplog.text

    def test_failing_strategy_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        masker = StructMasker(config=MaskingConfig())

        def explode(value, mask_char, options):
            raise RuntimeError("strategy exploded")

        masker.register("all", explode)

        with caplog.at_level(logging.ERROR, logger="structmask"):
            result = masker.mask_record(ChildRecord(credit_card="1", cvv="333"))

        assert result.cvv == "333"
        assert "Masking strategy failed" in caplog.text
        assert "RuntimeError" in caplog.text


class TestConfigureLogging:
    def test_json_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "structmask.log"
        configure_logging(
            LoggingConfig(level="DEBUG", format="json", output="file", file_path=str(log_file))
        )

        get_logger("structmask.tests").info("hello", answer=42)
        for handler in logging.getLogger("structmask").handlers:
            handler.flush()

        content = log_file.read_text()
        assert '"event": "hello"' in content
        assert '"answer": 42' in content

    def test_level_is_applied(self) -> None:
        configure_logging(LoggingConfig(level="ERROR"))

        assert logging.getLogger("structmask").level == logging.ERROR

    def test_defaults_come_from_process_config(self) -> None:
        configure_logging()

        assert logging.getLogger("structmask").level == logging.WARNING
