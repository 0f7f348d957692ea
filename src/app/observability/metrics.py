"""Registro de métricas via structured logging.

As métricas são logs estruturados agregáveis depois (ex: Cloud Logging).

Métricas suportadas:
- Latência: tempo por componente/operação (fetch, upsert, delete)
- Outcome: contador de resultados da sincronização por tipo de evento
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "caldav_client", "square_client")
        operation: Nome da operação (ex: "upsert", "get_booking")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_sync_outcome(
    outcome: str,
    event_kind: str | None,
    correlation_id: str | None = None,
) -> None:
    """Registra o resultado final de uma notificação.

    Args:
        outcome: upserted|deleted|duplicate|ignored|malformed|failed
        event_kind: Tipo normalizado do evento (created|updated|cancelled|other)
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_sync_outcome",
        extra={
            "metric_type": "counter",
            "component": "booking_sync",
            "outcome": outcome,
            "event_kind": event_kind,
            "correlation_id": correlation_id,
        },
    )
