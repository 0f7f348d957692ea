"""Conversão das respostas JSON do Square para o domínio."""

from __future__ import annotations

from typing import Any

from app.domain.booking import Address, Booking, Customer


def _first_segment_duration(raw: dict[str, Any]) -> int | None:
    """Apenas o primeiro segmento de um booking multi-segmento é usado."""
    segments = raw.get("appointment_segments") or []
    if not segments or not isinstance(segments[0], dict):
        return None
    duration = segments[0].get("duration_minutes")
    return int(duration) if duration is not None else None


def parse_booking(raw: dict[str, Any]) -> Booking:
    """Converte o objeto `booking` da Bookings API.

    Raises:
        pydantic.ValidationError: Se faltar id ou start_at.
    """
    return Booking(
        id=raw.get("id") or "",
        status=raw.get("status") or "",
        start_at=raw.get("start_at"),
        duration_minutes=_first_segment_duration(raw),
        customer_id=raw.get("customer_id") or None,
        cancellation_reason=raw.get("cancellation_reason") or None,
        cancelled_at=raw.get("cancelled_at") or raw.get("canceled_at") or None,
    )


def parse_address(raw: dict[str, Any] | None) -> Address | None:
    if not raw:
        return None
    return Address(
        line1=raw.get("address_line_1"),
        locality=raw.get("locality"),
        region=raw.get("administrative_district_level_1"),
        postal_code=raw.get("postal_code"),
        country=raw.get("country"),
    )


def parse_customer(raw: dict[str, Any]) -> Customer:
    """Converte o objeto `customer` da Customers API."""
    return Customer(
        given_name=raw.get("given_name") or "",
        family_name=raw.get("family_name") or "",
        address=parse_address(raw.get("address")),
        phone=raw.get("phone_number") or None,
    )
