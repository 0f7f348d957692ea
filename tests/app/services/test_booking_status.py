"""Testes do classificador de status de booking."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from app.domain.booking import Booking, BookingStatus
from app.services.booking_status import classify_booking


def _booking(**overrides: object) -> Booking:
    data: dict[str, object] = {
        "id": "B1",
        "status": "ACCEPTED",
        "start_at": datetime(2025, 6, 1, 18, 0, tzinfo=UTC),
    }
    data.update(overrides)
    return Booking(**data)


@pytest.mark.parametrize(
    "status",
    ["CANCELLED_BY_SELLER", "CANCELLED_BY_CUSTOMER", "CANCELED", "cancelled", "NO_SHOW"],
)
def test_cancellation_statuses(status: str) -> None:
    assert classify_booking(_booking(status=status)) is BookingStatus.CANCELLED


def test_cancelled_at_marks_cancelled() -> None:
    booking = _booking(cancelled_at=datetime(2025, 5, 30, tzinfo=UTC))
    assert classify_booking(booking) is BookingStatus.CANCELLED


def test_cancellation_reason_marks_cancelled() -> None:
    booking = _booking(cancellation_reason="SELLER_CANCELED")
    assert classify_booking(booking) is BookingStatus.CANCELLED


@pytest.mark.parametrize("status", ["ACCEPTED", "PENDING", "", "SOMETHING_NEW"])
def test_unknown_or_active_status_fails_open(status: str) -> None:
    assert classify_booking(_booking(status=status)) is BookingStatus.ACTIVE
