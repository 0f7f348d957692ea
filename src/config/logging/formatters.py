"""Formatters de logging estruturado (JSON).

Campos obrigatórios em todo log:
- asctime, level, logger, message
- correlation_id, service

Campos de `extra` (booking_id, event_kind, component, ...) são
anexados pelo JsonFormatter no mesmo objeto.
"""

from __future__ import annotations

import time

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter(*, timestamp_utc: bool = True) -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Args:
        timestamp_utc: Formata asctime em UTC (ISO 8601).

    Exemplo de output:
        {
            "asctime": "2025-06-01T18:00:00+0000",
            "level": "INFO",
            "logger": "app.use_cases.square.sync_booking",
            "message": "booking_sync_upserted",
            "correlation_id": "abc-123",
            "service": "truck_bookings_sync",
            "booking_id": "B1"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    formatter = JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    if timestamp_utc:
        formatter.converter = time.gmtime
    return formatter
