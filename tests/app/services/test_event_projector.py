"""Testes do projetor Booking -> CalendarEventRecord."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from app.domain.booking import Address, Booking, Customer
from app.services.event_projector import (
    EventProjector,
    build_description,
    build_uid,
    customer_full_name,
    format_address,
)


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


def _customer() -> Customer:
    return Customer(
        given_name="Ann",
        family_name="Lee",
        address=Address(line1="1 Main St", locality="Springfield"),
    )


def test_projects_expected_record() -> None:
    projector = EventProjector(label="Truck Event", uid_namespace="lilsicecream")

    record = projector.project(_booking(), _customer())

    assert record.uid == "B1@lilsicecream"
    assert record.summary == "Truck Event – Ann Lee"
    assert record.location == "1 Main St, Springfield"
    assert record.start == datetime(2025, 6, 1, 18, 0, tzinfo=UTC)
    assert record.end == datetime(2025, 6, 1, 19, 30, tzinfo=UTC)


def test_defaults_without_customer_and_duration() -> None:
    record = EventProjector().project(_booking(duration_minutes=None, customer_id=None))

    assert record.location == "TBD"
    assert "Customer" in record.summary
    assert record.end - record.start == timedelta(minutes=60)


def test_uid_depends_only_on_booking_id() -> None:
    projector = EventProjector()
    first = projector.project(_booking(status="ACCEPTED"), _customer())
    second = projector.project(_booking(status="PENDING", duration_minutes=30))

    assert first.uid == second.uid
    assert build_uid("B1") != build_uid("B2")


def test_customer_full_name_trims_and_defaults() -> None:
    assert customer_full_name(None) == "Customer"
    assert customer_full_name(Customer(given_name="  ", family_name="")) == "Customer"
    assert customer_full_name(Customer(given_name="Ann")) == "Ann"
    assert customer_full_name(Customer(family_name="Lee")) == "Lee"


def test_format_address_keeps_component_order() -> None:
    address = Address(
        line1="1 Main St",
        locality="Springfield",
        region="IL",
        postal_code="62701",
        country="US",
    )

    assert format_address(address) == "1 Main St, Springfield, IL, 62701, US"
    assert format_address(Address(locality="Springfield", country="US")) == "Springfield, US"
    assert format_address(None) == ""


def test_description_includes_booking_id_and_phone() -> None:
    description = build_description(
        "B1",
        Customer(phone="+1 555 0100"),
        dashboard_url="https://example.test/appointments",
    )

    assert description == (
        "Square: https://example.test/appointments (Booking ID: B1)\nPhone: +1 555 0100"
    )
    assert "Phone" not in build_description("B1", None)


def test_naive_start_is_treated_as_utc() -> None:
    record = EventProjector().project(_booking(start_at=datetime(2025, 6, 1, 18, 0)))

    assert record.start.tzinfo is not None
    assert record.start == datetime(2025, 6, 1, 18, 0, tzinfo=UTC)
