"""Classificacao deterministica do status de um booking.

Regra de negocio (fail-open):
- Cancelado se o status contem "CANCEL" (qualquer caixa), se o status e
  NO_SHOW, ou se o booking traz data ou motivo de cancelamento.
- Qualquer outro status (inclusive desconhecido) e tratado como ativo:
  um cancelamento perdido e visivel e recuperavel; apagar um evento
  valido nao e.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.booking import BookingStatus

if TYPE_CHECKING:
    from app.domain.booking import Booking

CANCELLATION_MARKER = "CANCEL"
NO_SHOW_STATUS = "NO_SHOW"


def classify_booking(booking: Booking) -> BookingStatus:
    """Mapeia o status bruto do booking para ACTIVE ou CANCELLED."""
    status = (booking.status or "").strip().upper()
    if CANCELLATION_MARKER in status or status == NO_SHOW_STATUS:
        return BookingStatus.CANCELLED
    if booking.cancelled_at is not None:
        return BookingStatus.CANCELLED
    if booking.cancellation_reason:
        return BookingStatus.CANCELLED
    return BookingStatus.ACTIVE
