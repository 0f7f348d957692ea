"""Projecao de Booking (+ Customer opcional) em CalendarEventRecord.

Funcao pura: sem IO e sem log. A falha ao buscar o customer e registrada
pelo orquestrador; aqui ela chega apenas como `customer=None`.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from app.domain.booking import CalendarEventRecord
from config.settings.sync import (
    DEFAULT_DASHBOARD_URL,
    DEFAULT_EVENT_LABEL,
    DEFAULT_UID_NAMESPACE,
)

if TYPE_CHECKING:
    from app.domain.booking import Address, Booking, Customer

DEFAULT_DURATION_MINUTES = 60
DEFAULT_CUSTOMER_NAME = "Customer"
UNKNOWN_LOCATION = "TBD"


def build_uid(booking_id: str, namespace: str = DEFAULT_UID_NAMESPACE) -> str:
    """UID estavel: depende apenas do booking id."""
    return f"{booking_id}@{namespace}"


def customer_full_name(customer: Customer | None) -> str:
    if customer is None:
        return DEFAULT_CUSTOMER_NAME
    full_name = f"{customer.given_name or ''} {customer.family_name or ''}".strip()
    return full_name or DEFAULT_CUSTOMER_NAME


def format_address(address: Address | None) -> str:
    """Junta os componentes nao vazios na ordem linha, cidade, estado, CEP, pais."""
    if address is None:
        return ""
    parts = (
        address.line1,
        address.locality,
        address.region,
        address.postal_code,
        address.country,
    )
    return ", ".join(part.strip() for part in parts if part and part.strip())


def build_summary(label: str, customer: Customer | None) -> str:
    return f"{label} – {customer_full_name(customer)}"


def build_description(
    booking_id: str,
    customer: Customer | None,
    dashboard_url: str = DEFAULT_DASHBOARD_URL,
) -> str:
    lines = [f"Square: {dashboard_url} (Booking ID: {booking_id})"]
    if customer is not None and customer.phone:
        lines.append(f"Phone: {customer.phone}")
    return "\n".join(lines)


class EventProjector:
    """Deriva o evento de calendario de um booking.

    Args:
        label: Rotulo fixo do SUMMARY.
        uid_namespace: Sufixo do UID.
        dashboard_url: Link do painel incluido na DESCRIPTION.
    """

    def __init__(
        self,
        *,
        label: str = DEFAULT_EVENT_LABEL,
        uid_namespace: str = DEFAULT_UID_NAMESPACE,
        dashboard_url: str = DEFAULT_DASHBOARD_URL,
    ) -> None:
        self._label = label
        self._uid_namespace = uid_namespace
        self._dashboard_url = dashboard_url

    @property
    def label(self) -> str:
        return self._label

    def uid_for(self, booking_id: str) -> str:
        return build_uid(booking_id, self._uid_namespace)

    def summary_for(self, customer: Customer | None) -> str:
        return build_summary(self._label, customer)

    def project(self, booking: Booking, customer: Customer | None = None) -> CalendarEventRecord:
        duration = booking.duration_minutes
        if duration is None:
            duration = DEFAULT_DURATION_MINUTES
        start = booking.start_at
        return CalendarEventRecord(
            uid=self.uid_for(booking.id),
            summary=self.summary_for(customer),
            location=format_address(customer.address if customer else None) or UNKNOWN_LOCATION,
            description=build_description(booking.id, customer, self._dashboard_url),
            start=start,
            end=start + timedelta(minutes=duration),
        )
