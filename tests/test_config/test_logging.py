"""Testes para config.logging.

Cobre: configure_logging, get_logger, log_fallback,
CorrelationIdFilter, SensitiveFieldFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    SensitiveFieldFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.use_cases.square.sync_booking",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="booking_sync_upserted",
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_case_insensitive(self) -> None:
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_filters(self) -> None:
        configure_logging(correlation_id_getter=lambda: "corr-1")
        filters = logging.getLogger().handlers[0].filters
        assert any(isinstance(f, CorrelationIdFilter) for f in filters)
        assert any(isinstance(f, SensitiveFieldFilter) for f in filters)

    def test_http_libraries_quieted(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "truck_bookings_sync"


class TestGetLogger:
    def test_get_logger_returns_named_logger(self) -> None:
        logger = get_logger("test.module")
        assert logger.name == "test.module"
        assert logger is get_logger("test.module")


class TestLogFallback:
    """Testes para log_fallback."""

    def test_log_fallback_with_reason_and_context(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "customer_lookup", reason="NotFoundError", booking_id="B1")

        logger.warning.assert_called_once()
        args, kwargs = logger.warning.call_args
        assert args[0] == "fallback_applied"
        assert kwargs["extra"] == {
            "fallback_used": True,
            "component": "customer_lookup",
            "booking_id": "B1",
            "reason": "NotFoundError",
        }

    def test_log_fallback_without_reason(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "cancellation_enrichment")

        assert "reason" not in logger.warning.call_args[1]["extra"]


class TestCorrelationIdFilter:
    def test_injects_correlation_and_service(self) -> None:
        record = _record()

        assert CorrelationIdFilter("svc", lambda: "corr-1").filter(record) is True
        assert record.correlation_id == "corr-1"
        assert record.service == "svc"

    def test_explicit_correlation_id_has_priority(self) -> None:
        record = _record(correlation_id="explicit")

        CorrelationIdFilter("svc", lambda: "ctx").filter(record)

        assert record.correlation_id == "explicit"

    def test_without_getter_uses_empty_string(self) -> None:
        record = _record()

        CorrelationIdFilter("svc").filter(record)

        assert record.correlation_id == ""


class TestSensitiveFieldFilter:
    def test_masks_sensitive_extra_fields(self) -> None:
        record = _record(phone="+15550100", given_name="Ann", booking_id="B1")

        SensitiveFieldFilter().filter(record)

        assert record.phone == "***"
        assert record.given_name == "***"
        assert record.booking_id == "B1"

    def test_custom_field_list(self) -> None:
        record = _record(secret_field="x", phone="+15550100")

        SensitiveFieldFilter({"secret_field"}).filter(record)

        assert record.secret_field == "***"
        assert record.phone == "+15550100"


class TestJsonFormatter:
    def test_output_has_required_fields_renamed(self) -> None:
        record = _record(booking_id="B1")
        CorrelationIdFilter("truck_bookings_sync", lambda: "corr-1").filter(record)

        payload = json.loads(create_json_formatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "app.use_cases.square.sync_booking"
        assert payload["message"] == "booking_sync_upserted"
        assert payload["correlation_id"] == "corr-1"
        assert payload["service"] == "truck_bookings_sync"
        assert payload["booking_id"] == "B1"
        assert payload["asctime"].endswith("+0000")

    def test_field_constants(self) -> None:
        assert "correlation_id" in REQUIRED_LOG_FIELDS
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}
