"""Testes do SyncBookingUseCase com fakes em memória."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from api.payload_builders.apple_calendar import parse_event
from app.domain.booking import Address, Booking, Customer
from app.domain.notification import EventKind
from app.infra.stores import MemoryDedupeStore, RedisDedupeStore
from app.protocols import DedupeProtocol
from app.services.dedupe_gate import DedupeGate
from app.services.event_projector import EventProjector
from app.use_cases.square import (
    AcknowledgePolicy,
    NotificationPolicy,
    SyncBookingUseCase,
    SyncResult,
)
from tests.fakes.fake_booking_source import FakeBookingSource
from tests.fakes.fake_calendar_store import FakeCalendarStore
from tests.fakes.fake_notifier import FakeNotifier
from utils.errors import TransientUpstreamError

UID = "B1@lilsicecream"


def _booking(**overrides: object) -> Booking:
    data: dict[str, object] = {
        "id": "B1",
        "status": "ACCEPTED",
        "start_at": "2025-06-01T18:00:00Z",
        "duration_minutes": 90,
        "customer_id": "C1",
    }
    data.update(overrides)
    return Booking(**data)


ANN = Customer(
    given_name="Ann",
    family_name="Lee",
    address=Address(line1="1 Main St", locality="Springfield"),
)


def _payload(event_type: str = "booking.created", event_id: str | None = "evt-1") -> dict:
    payload: dict[str, object] = {"type": event_type, "data": {"id": "B1"}}
    if event_id is not None:
        payload["event_id"] = event_id
    return payload


class _Harness:
    def __init__(
        self,
        *,
        notifier: FakeNotifier | None = None,
        policy: NotificationPolicy | None = None,
        store: DedupeProtocol | None = None,
    ) -> None:
        self.bookings = FakeBookingSource({"B1": _booking()}, {"C1": ANN})
        self.calendar = FakeCalendarStore()
        self.store = MemoryDedupeStore() if store is None else store
        self.notifier = notifier or FakeNotifier(enabled=False)
        self.use_case = SyncBookingUseCase(
            bookings=self.bookings,
            calendar=self.calendar,
            gate=DedupeGate(self.store),
            projector=EventProjector(label="Truck Event", uid_namespace="lilsicecream"),
            notifier=self.notifier,
            notification_policy=policy,
        )


@pytest.mark.asyncio
async def test_created_booking_upserts_projected_event() -> None:
    harness = _Harness()

    result = await harness.use_case.execute(_payload(), correlation_id="corr-1")

    assert result == SyncResult(
        outcome="upserted", booking_id="B1", uid=UID, event_kind=EventKind.CREATED
    )
    record = parse_event(harness.calendar.objects[UID])
    assert record.summary == "Truck Event – Ann Lee"
    assert record.location == "1 Main St, Springfield"
    assert record.start == datetime(2025, 6, 1, 18, 0, tzinfo=UTC)
    assert record.end == datetime(2025, 6, 1, 19, 30, tzinfo=UTC)


@pytest.mark.asyncio
async def test_cancelled_status_deletes_same_uid() -> None:
    harness = _Harness()
    harness.bookings.bookings["B1"] = _booking(status="CANCELED")

    result = await harness.use_case.execute(_payload("booking.updated"))

    assert result.outcome == "deleted"
    assert harness.calendar.deletes == [UID]
    assert harness.calendar.upserts == []


@pytest.mark.asyncio
async def test_cancellation_after_create_removes_object() -> None:
    harness = _Harness()
    await harness.use_case.execute(_payload(event_id="evt-1"))
    harness.bookings.bookings["B1"] = _booking(status="CANCELLED_BY_CUSTOMER")

    result = await harness.use_case.execute(_payload("booking.updated", event_id="evt-2"))

    assert result.outcome == "deleted"
    assert UID not in harness.calendar.objects


@pytest.mark.asyncio
async def test_cancelled_event_kind_deletes_even_when_booking_lookup_fails() -> None:
    harness = _Harness(notifier=FakeNotifier())
    harness.bookings.booking_errors["B1"] = TransientUpstreamError("down", status_code=503)

    result = await harness.use_case.execute(_payload("booking.cancelled"))

    assert result.outcome == "deleted"
    assert harness.calendar.deletes == [UID]
    assert harness.notifier.sent[0].subject == "Cancelled: booking B1"


@pytest.mark.asyncio
async def test_cancellation_subject_uses_customer_name() -> None:
    harness = _Harness(notifier=FakeNotifier())
    harness.bookings.bookings["B1"] = _booking(status="CANCELLED_BY_SELLER")

    await harness.use_case.execute(_payload("booking.updated"))

    assert harness.notifier.sent[0].subject == "Cancelled: Truck Event – Ann Lee"


@pytest.mark.asyncio
async def test_duplicate_notification_processed_once() -> None:
    harness = _Harness()

    first = await harness.use_case.execute(_payload())
    second = await harness.use_case.execute(_payload())

    assert first.outcome == "upserted"
    assert second.outcome == "duplicate"
    assert harness.calendar.upserts == [UID]
    assert harness.bookings.booking_calls == ["B1"]


@pytest.mark.asyncio
async def test_missing_event_id_is_never_deduplicated() -> None:
    harness = _Harness()

    await harness.use_case.execute(_payload(event_id=None))
    await harness.use_case.execute(_payload(event_id=None))

    assert harness.calendar.upserts == [UID, UID]
    assert list(harness.calendar.objects) == [UID]


@pytest.mark.asyncio
async def test_other_event_kinds_are_ignored() -> None:
    harness = _Harness()

    result = await harness.use_case.execute(_payload("booking.deleted"))

    assert result.outcome == "ignored"
    assert harness.bookings.booking_calls == []


@pytest.mark.asyncio
async def test_malformed_payload() -> None:
    harness = _Harness()

    result = await harness.use_case.execute({"type": "booking.created", "data": {}})

    assert result.outcome == "malformed"
    assert result.reason == "missing_booking_id"


@pytest.mark.asyncio
async def test_customer_failure_falls_back_to_defaults() -> None:
    harness = _Harness()
    harness.bookings.customer_errors["C1"] = TransientUpstreamError("timeout")

    result = await harness.use_case.execute(_payload())

    assert result.outcome == "upserted"
    record = parse_event(harness.calendar.objects[UID])
    assert record.summary == "Truck Event – Customer"
    assert record.location == "TBD"


@pytest.mark.asyncio
async def test_booking_fetch_failure_fails_and_releases_dedupe() -> None:
    harness = _Harness()
    harness.bookings.booking_errors["B1"] = TransientUpstreamError("down", status_code=500)

    failed = await harness.use_case.execute(_payload())

    assert failed.outcome == "failed"
    assert failed.succeeded is False
    assert "evt-1" not in harness.store

    del harness.bookings.booking_errors["B1"]
    retried = await harness.use_case.execute(_payload())
    assert retried.outcome == "upserted"


@pytest.mark.asyncio
async def test_missing_booking_is_failed() -> None:
    harness = _Harness()
    harness.bookings.bookings.clear()

    result = await harness.use_case.execute(_payload())

    assert result.outcome == "failed"
    assert result.reason == "NotFoundError"


@pytest.mark.asyncio
async def test_calendar_failure_is_contained() -> None:
    harness = _Harness()
    harness.calendar.upsert_error = TransientUpstreamError("caldav down", status_code=503)

    result = await harness.use_case.execute(_payload())

    assert result.outcome == "failed"
    assert result.uid == UID


@pytest.mark.asyncio
async def test_dedupe_backend_failure_is_failed_outcome() -> None:
    client = MagicMock()
    client.set.side_effect = ConnectionError("redis down")
    harness = _Harness(store=RedisDedupeStore(client))

    result = await harness.use_case.execute(_payload())

    assert result.outcome == "failed"
    assert result.reason == "RedisConnectionError"
    assert harness.bookings.booking_calls == []
    client.delete.assert_not_called()


@pytest.mark.asyncio
async def test_dedupe_release_failure_keeps_failed_outcome() -> None:
    client = MagicMock()
    client.set.return_value = True
    client.delete.side_effect = ConnectionError("redis down")
    harness = _Harness(store=RedisDedupeStore(client))
    harness.calendar.upsert_error = TransientUpstreamError("caldav down", status_code=503)

    result = await harness.use_case.execute(_payload())

    assert result.outcome == "failed"
    assert result.reason == "TransientUpstreamError"
    client.delete.assert_called_once()


@pytest.mark.asyncio
async def test_created_event_sends_email_with_ics_attachment() -> None:
    harness = _Harness(notifier=FakeNotifier())

    await harness.use_case.execute(_payload())

    [message] = harness.notifier.sent
    assert message.subject == "New: Truck Event – Ann Lee"
    assert message.ics_filename == f"{UID}.ics"
    assert message.ics_document == harness.calendar.objects[UID]


@pytest.mark.asyncio
async def test_updated_event_email_only_when_enabled() -> None:
    silent = _Harness(notifier=FakeNotifier())
    await silent.use_case.execute(_payload("booking.updated"))
    assert silent.notifier.sent == []

    loud = _Harness(notifier=FakeNotifier(), policy=NotificationPolicy(notify_on_update=True))
    await loud.use_case.execute(_payload("booking.updated"))
    assert loud.notifier.sent[0].subject == "Updated: Truck Event – Ann Lee"


@pytest.mark.asyncio
async def test_email_failure_does_not_fail_sync() -> None:
    harness = _Harness(notifier=FakeNotifier(error=OSError("smtp down")))

    result = await harness.use_case.execute(_payload())

    assert result.outcome == "upserted"


def test_acknowledge_policy() -> None:
    failed = SyncResult(outcome="failed")
    upserted = SyncResult(outcome="upserted")

    assert AcknowledgePolicy().status_code_for(failed) == 200
    assert AcknowledgePolicy(always_acknowledge=False).status_code_for(failed) == 500
    assert AcknowledgePolicy(always_acknowledge=False).status_code_for(upserted) == 200
