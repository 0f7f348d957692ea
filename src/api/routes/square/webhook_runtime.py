"""Runtime helpers para processamento do webhook Square."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.routes.square.webhook_runtime_tasks import (
    drain_processing_tasks,
    run_serialized,
    schedule_processing_task,
)
from app.observability import correlation_scope

if TYPE_CHECKING:
    from app.use_cases.square import SyncBookingUseCase, SyncResult

logger = logging.getLogger(__name__)

_sync_use_case: SyncBookingUseCase | None = None


def get_sync_use_case() -> SyncBookingUseCase:
    """Obtém o use case de sincronização (lazy-loading)."""
    global _sync_use_case
    if _sync_use_case is None:
        from app.bootstrap.dependencies import create_sync_use_case

        _sync_use_case = create_sync_use_case()
    return _sync_use_case


def set_sync_use_case(use_case: SyncBookingUseCase | None) -> None:
    """Substitui o use case em cache (lifespan e testes)."""
    global _sync_use_case
    _sync_use_case = use_case


async def process_notification(
    *,
    payload: Any,
    correlation_id: str,
    use_case: SyncBookingUseCase,
) -> SyncResult:
    """Executa o use case dentro do escopo de correlation_id."""
    with correlation_scope(correlation_id):
        result = await use_case.execute(payload, correlation_id=correlation_id)
    logger.info(
        "webhook_processing_completed",
        extra={
            "channel": "square",
            "correlation_id": correlation_id,
            "outcome": result.outcome,
            "booking_id": result.booking_id,
        },
    )
    return result


async def dispatch_notification(
    *,
    payload: Any,
    correlation_id: str,
    processing_mode: str,
) -> SyncResult | None:
    """Despacha processamento inline ou async conforme configuração.

    Returns:
        SyncResult no modo inline; None quando agendado em background.
    """
    use_case = get_sync_use_case()
    coroutine = process_notification(
        payload=payload,
        correlation_id=correlation_id,
        use_case=use_case,
    )
    if (processing_mode or "async").lower() == "inline":
        return await run_serialized(coroutine)
    schedule_processing_task(correlation_id=correlation_id, coroutine=coroutine)
    return None


async def drain_background_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda tasks async pendentes durante shutdown do processo."""
    await drain_processing_tasks(timeout_seconds=timeout_seconds)
