"""Modelos de dominio para bookings e o evento de calendario derivado.

Esses contratos ficam no dominio para que projetor, classificador e
orquestrador nao dependam do formato JSON do Square.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_utc(value: datetime) -> datetime:
    """Datas sem timezone sao interpretadas como UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class BookingStatus(str, Enum):
    """Estado normalizado de um booking para fins de calendario."""

    ACTIVE = "active"
    CANCELLED = "cancelled"


class Address(BaseModel):
    """Endereco postal do cliente."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    line1: str | None = None
    locality: str | None = None
    region: str | None = None
    postal_code: str | None = None
    country: str | None = None


class Customer(BaseModel):
    """Snapshot somente-leitura do cliente."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    given_name: str = ""
    family_name: str = ""
    address: Address | None = None
    phone: str | None = None


class Booking(BaseModel):
    """Snapshot somente-leitura de um booking buscado por notificacao."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., min_length=1, description="Identificador do booking no Square.")
    status: str = Field(default="", description="Status bruto (ex: ACCEPTED, CANCELLED_BY_SELLER).")
    start_at: datetime = Field(..., description="Inicio do atendimento (UTC).")
    duration_minutes: int | None = Field(
        default=None,
        ge=0,
        description="Duracao do primeiro segmento; None quando ausente.",
    )
    customer_id: str | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None

    @field_validator("start_at", "cancelled_at")
    @classmethod
    def _normalize_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value) if value is not None else None


class CalendarEventRecord(BaseModel):
    """Evento de calendario calculado a partir de Booking/Customer.

    Nao tem identidade propria alem de `uid`.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    uid: str
    summary: str
    location: str
    description: str
    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _normalize_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


__all__ = [
    "Address",
    "Booking",
    "BookingStatus",
    "CalendarEventRecord",
    "Customer",
]
