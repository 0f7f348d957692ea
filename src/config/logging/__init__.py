"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="truck_bookings_sync")
    logger = get_logger(__name__)
    logger.info("booking_sync_upserted", extra={"booking_id": "B1"})

Campos obrigatórios em todo log: correlation_id, service, level,
logger, message, asctime. Logs estruturados, sem PII.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import (
    DEFAULT_SENSITIVE_FIELDS,
    CorrelationIdFilter,
    SensitiveFieldFilter,
)
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SensitiveFieldFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
