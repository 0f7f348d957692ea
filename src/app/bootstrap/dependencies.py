"""Factories de dependências — criação de implementações concretas.

Centraliza a criação de stores e conectores a partir das settings e
monta o SyncBookingUseCase.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.apple_calendar import create_caldav_client
from api.connectors.email import create_notifier
from api.connectors.square import create_square_booking_client
from app.bootstrap.clients import create_redis_client
from app.infra.stores import MemoryDedupeStore, RedisDedupeStore
from app.services.dedupe_gate import DedupeGate
from app.services.event_projector import EventProjector
from app.use_cases.square import NotificationPolicy, SyncBookingUseCase
from config.settings import (
    get_base_settings,
    get_dedupe_settings,
    get_sync_settings,
)

if TYPE_CHECKING:
    from app.protocols import (
        BookingSourceProtocol,
        CalendarStoreProtocol,
        DedupeProtocol,
        NotifierProtocol,
    )

logger = logging.getLogger(__name__)


def create_dedupe_store() -> DedupeProtocol:
    """Cria store de dedupe baseado em DEDUPE_BACKEND.

    - "memory": MemoryDedupeStore (volátil, padrão)
    - "redis": RedisDedupeStore (apenas quando configurado explicitamente)
    """
    backend = get_dedupe_settings().backend

    if backend == "redis":
        store: DedupeProtocol = RedisDedupeStore(create_redis_client())
        logger.info("dedupe_store_created", extra={"backend": "redis"})
        return store

    if backend == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.info(
                "memory_dedupe_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        logger.info("dedupe_store_created", extra={"backend": "memory"})
        return MemoryDedupeStore()

    msg = f"DEDUPE_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_dedupe_gate(store: DedupeProtocol | None = None) -> DedupeGate:
    return DedupeGate(
        store or create_dedupe_store(),
        ttl_seconds=get_dedupe_settings().ttl_seconds,
    )


def create_booking_source() -> BookingSourceProtocol:
    return create_square_booking_client()


def create_calendar_store() -> CalendarStoreProtocol:
    return create_caldav_client()


def create_event_projector() -> EventProjector:
    sync = get_sync_settings()
    return EventProjector(
        label=sync.event_label,
        uid_namespace=sync.uid_namespace,
        dashboard_url=sync.dashboard_url,
    )


def create_sync_use_case(
    *,
    bookings: BookingSourceProtocol | None = None,
    calendar: CalendarStoreProtocol | None = None,
    gate: DedupeGate | None = None,
    notifier: NotifierProtocol | None = None,
) -> SyncBookingUseCase:
    """Monta o use case com as implementações configuradas.

    Raises:
        ConfigurationMissingError: Credenciais CalDAV ausentes.
    """
    sync = get_sync_settings()
    use_case = SyncBookingUseCase(
        bookings=bookings or create_booking_source(),
        calendar=calendar or create_calendar_store(),
        gate=gate or create_dedupe_gate(),
        projector=create_event_projector(),
        notifier=notifier or create_notifier(),
        product_id=sync.product_id,
        notification_policy=NotificationPolicy(notify_on_update=sync.notify_on_update),
    )
    logger.info("sync_use_case_created", extra={"component": "bootstrap"})
    return use_case
