"""Use case de sincronização booking -> calendário.

Pipeline por notificação:
    parse -> dedupe -> filtro de tipo -> fetch booking -> classificação
    -> ActivePath (customer best-effort, projeção, ICS, upsert)
    | CancelledPath (enriquecimento best-effort, delete)

Toda falha interna é capturada aqui, logada com booking_id/event_kind e
convertida no outcome ``failed``. O transporte decide o status HTTP pela
AcknowledgePolicy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from api.connectors.square.notification import parse_notification
from api.payload_builders.apple_calendar import build_ics
from app.domain.booking import BookingStatus
from app.domain.notification import EventKind, MalformedNotification
from app.observability import record_sync_outcome
from app.services.booking_status import classify_booking
from config.logging import log_fallback
from config.settings.sync import DEFAULT_PRODUCT_ID

if TYPE_CHECKING:
    from app.domain.booking import Booking, CalendarEventRecord, Customer
    from app.domain.notification import BookingNotification
    from app.protocols.booking_source import BookingSourceProtocol
    from app.protocols.calendar_store import CalendarStoreProtocol
    from app.protocols.notifier import NotifierProtocol
    from app.services.dedupe_gate import DedupeGate
    from app.services.event_projector import EventProjector

logger = logging.getLogger(__name__)

_COMPONENT = "booking_sync"

OUTCOME_MALFORMED = "malformed"
OUTCOME_IGNORED = "ignored"
OUTCOME_DUPLICATE = "duplicate"
OUTCOME_UPSERTED = "upserted"
OUTCOME_DELETED = "deleted"
OUTCOME_FAILED = "failed"


@dataclass(frozen=True, slots=True)
class NotificationPolicy:
    """Quando enviar o email lateral."""

    notify_on_create: bool = True
    notify_on_update: bool = False
    notify_on_cancel: bool = True


@dataclass(frozen=True, slots=True)
class AcknowledgePolicy:
    """Política de resposta ao Square.

    Com ``always_acknowledge`` o Square sempre recebe 200, evitando
    tempestade de retries. Desligada, um ``failed`` responde 500 para
    que o Square reenvie (exige processamento inline).
    """

    always_acknowledge: bool = True

    def status_code_for(self, result: SyncResult) -> int:
        if self.always_acknowledge or result.outcome != OUTCOME_FAILED:
            return 200
        return 500


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Resultado terminal de uma notificação."""

    outcome: str
    booking_id: str | None = None
    uid: str | None = None
    event_kind: EventKind | None = None
    reason: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome != OUTCOME_FAILED


class SyncBookingUseCase:
    """Orquestra a sincronização de uma notificação de booking.

    Args:
        bookings: Fonte de bookings/customers (Square).
        calendar: Store de calendário (CalDAV).
        gate: Gate de dedupe por notification id.
        projector: Projetor Booking -> CalendarEventRecord.
        notifier: Canal lateral de email (no-op quando desativado).
        product_id: PRODID do documento ICS.
        notification_policy: Quando notificar por email.
    """

    def __init__(
        self,
        *,
        bookings: BookingSourceProtocol,
        calendar: CalendarStoreProtocol,
        gate: DedupeGate,
        projector: EventProjector,
        notifier: NotifierProtocol,
        product_id: str = DEFAULT_PRODUCT_ID,
        notification_policy: NotificationPolicy | None = None,
    ) -> None:
        self._bookings = bookings
        self._calendar = calendar
        self._gate = gate
        self._projector = projector
        self._notifier = notifier
        self._product_id = product_id
        self._policy = notification_policy or NotificationPolicy()

    async def execute(
        self,
        payload: Any,
        *,
        correlation_id: str | None = None,
    ) -> SyncResult:
        """Processa uma notificação até o estado terminal.

        Nunca levanta exceção: falhas viram ``SyncResult(outcome="failed")``.
        """
        parsed = parse_notification(payload)
        if isinstance(parsed, MalformedNotification):
            logger.warning(
                "notification_malformed",
                extra={
                    "component": _COMPONENT,
                    "reason": parsed.reason,
                    "event_type": parsed.raw_event_type,
                    "correlation_id": correlation_id,
                },
            )
            return self._finish(
                SyncResult(outcome=OUTCOME_MALFORMED, reason=parsed.reason),
                correlation_id,
            )

        kind = parsed.event_kind
        claimed = False
        try:
            if not self._gate.should_process(parsed.notification_id):
                return self._finish(
                    SyncResult(
                        outcome=OUTCOME_DUPLICATE,
                        booking_id=parsed.booking_id,
                        event_kind=kind,
                    ),
                    correlation_id,
                )
            claimed = True

            if kind is EventKind.OTHER:
                logger.info(
                    "notification_ignored",
                    extra={
                        "component": _COMPONENT,
                        "event_type": parsed.raw_event_type,
                        "booking_id": parsed.booking_id,
                        "correlation_id": correlation_id,
                    },
                )
                return self._finish(
                    SyncResult(
                        outcome=OUTCOME_IGNORED,
                        booking_id=parsed.booking_id,
                        event_kind=kind,
                    ),
                    correlation_id,
                )

            result = await self._dispatch(parsed, correlation_id)
        except Exception as exc:
            logger.error(
                "booking_sync_failed",
                extra={
                    "component": _COMPONENT,
                    "booking_id": parsed.booking_id,
                    "event_kind": kind.value,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                    "correlation_id": correlation_id,
                },
                exc_info=True,
            )
            if claimed:
                self._release(parsed.notification_id, correlation_id)
            result = SyncResult(
                outcome=OUTCOME_FAILED,
                booking_id=parsed.booking_id,
                uid=self._projector.uid_for(parsed.booking_id),
                event_kind=kind,
                reason=type(exc).__name__,
            )
        return self._finish(result, correlation_id)

    def _release(self, notification_id: str | None, correlation_id: str | None) -> None:
        """Libera o id no gate; uma falha aqui só é logada."""
        try:
            self._gate.release(notification_id)
        except Exception as exc:
            logger.warning(
                "dedupe_release_failed",
                extra={
                    "component": _COMPONENT,
                    "notification_id": notification_id,
                    "error_type": type(exc).__name__,
                    "correlation_id": correlation_id,
                },
            )

    async def _dispatch(
        self,
        notification: BookingNotification,
        correlation_id: str | None,
    ) -> SyncResult:
        if notification.event_kind is EventKind.CANCELLED:
            return await self._cancelled_path(notification, None, correlation_id)

        booking = await self._bookings.get_booking(notification.booking_id)
        if classify_booking(booking) is BookingStatus.CANCELLED:
            return await self._cancelled_path(notification, booking, correlation_id)
        return await self._active_path(notification, booking, correlation_id)

    async def _active_path(
        self,
        notification: BookingNotification,
        booking: Booking,
        correlation_id: str | None,
    ) -> SyncResult:
        customer = await self._fetch_customer(booking, correlation_id)
        record = self._projector.project(booking, customer)
        document = build_ics(record, product_id=self._product_id)
        etag = await self._calendar.upsert(record.uid, document)
        logger.info(
            "booking_sync_upserted",
            extra={
                "component": _COMPONENT,
                "booking_id": booking.id,
                "event_kind": notification.event_kind.value,
                "etag_present": etag is not None,
                "correlation_id": correlation_id,
            },
        )

        if self._should_notify_saved(notification.event_kind):
            verb = "New" if notification.event_kind is EventKind.CREATED else "Updated"
            await self._notify(
                subject=f"{verb}: {record.summary}",
                body=_saved_body(record),
                ics_document=document,
                ics_filename=f"{record.uid}.ics",
                booking_id=booking.id,
                correlation_id=correlation_id,
            )
        return SyncResult(
            outcome=OUTCOME_UPSERTED,
            booking_id=booking.id,
            uid=record.uid,
            event_kind=notification.event_kind,
        )

    async def _cancelled_path(
        self,
        notification: BookingNotification,
        booking: Booking | None,
        correlation_id: str | None,
    ) -> SyncResult:
        uid = self._projector.uid_for(notification.booking_id)
        subject = f"Cancelled: booking {notification.booking_id}"
        if self._policy.notify_on_cancel and self._notifier.enabled:
            subject = await self._cancellation_subject(notification, booking, correlation_id)

        await self._calendar.delete(uid)
        logger.info(
            "booking_sync_deleted",
            extra={
                "component": _COMPONENT,
                "booking_id": notification.booking_id,
                "event_kind": notification.event_kind.value,
                "correlation_id": correlation_id,
            },
        )

        if self._policy.notify_on_cancel:
            await self._notify(
                subject=subject,
                body=f"Booking {notification.booking_id} was cancelled and removed from the calendar.",
                booking_id=notification.booking_id,
                correlation_id=correlation_id,
            )
        return SyncResult(
            outcome=OUTCOME_DELETED,
            booking_id=notification.booking_id,
            uid=uid,
            event_kind=notification.event_kind,
        )

    async def _cancellation_subject(
        self,
        notification: BookingNotification,
        booking: Booking | None,
        correlation_id: str | None,
    ) -> str:
        """Assunto amigável; qualquer falha no enriquecimento cai no assunto genérico."""
        fallback = f"Cancelled: booking {notification.booking_id}"
        try:
            if booking is None:
                booking = await self._bookings.get_booking(notification.booking_id)
            if not booking.customer_id:
                return fallback
            customer = await self._bookings.get_customer(booking.customer_id)
        except Exception as exc:
            log_fallback(
                logger,
                "cancellation_enrichment",
                reason=type(exc).__name__,
                booking_id=notification.booking_id,
                correlation_id=correlation_id,
            )
            return fallback
        return f"Cancelled: {self._projector.summary_for(customer)}"

    async def _fetch_customer(
        self,
        booking: Booking,
        correlation_id: str | None,
    ) -> Customer | None:
        if not booking.customer_id:
            return None
        try:
            return await self._bookings.get_customer(booking.customer_id)
        except Exception as exc:
            log_fallback(
                logger,
                "customer_lookup",
                reason=type(exc).__name__,
                booking_id=booking.id,
                correlation_id=correlation_id,
            )
            return None

    def _should_notify_saved(self, kind: EventKind) -> bool:
        if kind is EventKind.CREATED:
            return self._policy.notify_on_create
        return self._policy.notify_on_update

    async def _notify(
        self,
        *,
        subject: str,
        body: str,
        booking_id: str,
        correlation_id: str | None,
        ics_document: str | None = None,
        ics_filename: str = "event.ics",
    ) -> None:
        """Envia o email lateral; falhas são logadas e não afetam o outcome."""
        if not self._notifier.enabled:
            return
        try:
            await self._notifier.send(
                subject=subject,
                body=body,
                ics_document=ics_document,
                ics_filename=ics_filename,
            )
        except Exception as exc:
            logger.warning(
                "email_notification_failed",
                extra={
                    "component": _COMPONENT,
                    "booking_id": booking_id,
                    "error_type": type(exc).__name__,
                    "correlation_id": correlation_id,
                },
            )

    @staticmethod
    def _finish(result: SyncResult, correlation_id: str | None) -> SyncResult:
        record_sync_outcome(
            result.outcome,
            result.event_kind.value if result.event_kind else None,
            correlation_id,
        )
        return result


def _saved_body(record: CalendarEventRecord) -> str:
    return "\n".join(
        [
            record.summary,
            f"When: {record.start.isoformat()} – {record.end.isoformat()}",
            f"Where: {record.location}",
            "",
            record.description,
        ]
    )
