"""Testes do parse das notificações de webhook do Square."""

from __future__ import annotations

import pytest

from api.connectors.square.notification import classify_event_type, parse_notification
from app.domain.notification import BookingNotification, EventKind, MalformedNotification


@pytest.mark.parametrize(
    ("event_type", "kind"),
    [
        ("booking.created", EventKind.CREATED),
        ("BOOKING.UPDATED", EventKind.UPDATED),
        ("booking.cancelled", EventKind.CANCELLED),
        ("booking.canceled", EventKind.CANCELLED),
        ("customer.created", EventKind.OTHER),
        ("booking.deleted", EventKind.OTHER),
    ],
)
def test_classify_event_type(event_type: str, kind: EventKind) -> None:
    assert classify_event_type(event_type) is kind


def test_booking_id_from_data_id() -> None:
    parsed = parse_notification(
        {"type": "booking.created", "event_id": "evt-1", "data": {"id": "B1"}}
    )

    assert parsed == BookingNotification(
        notification_id="evt-1",
        event_kind=EventKind.CREATED,
        raw_event_type="booking.created",
        booking_id="B1",
    )


def test_booking_id_from_nested_booking_object() -> None:
    parsed = parse_notification(
        {
            "type": "booking.updated",
            "data": {"type": "booking", "object": {"booking": {"id": "B2"}}},
        }
    )

    assert isinstance(parsed, BookingNotification)
    assert parsed.booking_id == "B2"
    assert parsed.notification_id is None


def test_first_present_path_wins() -> None:
    parsed = parse_notification(
        {
            "type": "booking.updated",
            "data": {"id": "", "object": {"booking": {"id": "B3"}, "id": "B4"}},
        }
    )

    assert isinstance(parsed, BookingNotification)
    assert parsed.booking_id == "B3"


def test_booking_id_from_object_id() -> None:
    parsed = parse_notification({"type": "booking.updated", "data": {"object": {"id": "B5"}}})

    assert isinstance(parsed, BookingNotification)
    assert parsed.booking_id == "B5"


@pytest.mark.parametrize(
    ("payload", "reason"),
    [
        ([], "payload_not_object"),
        ("booking.created", "payload_not_object"),
        ({"data": {"id": "B1"}}, "missing_event_type"),
        ({"type": "booking.created"}, "missing_booking_id"),
        ({"type": "booking.created", "data": {"object": "B1"}}, "missing_booking_id"),
    ],
)
def test_malformed_payloads(payload: object, reason: str) -> None:
    parsed = parse_notification(payload)

    assert isinstance(parsed, MalformedNotification)
    assert parsed.reason == reason


def test_unknown_event_kind_still_parsed() -> None:
    parsed = parse_notification({"type": "customer.updated", "data": {"id": "C1"}})

    assert isinstance(parsed, BookingNotification)
    assert parsed.event_kind is EventKind.OTHER
