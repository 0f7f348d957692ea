"""Parse de notificações de webhook do Square (Bookings).

Função total: todo payload vira `BookingNotification` ou
`MalformedNotification`. Nenhum id sintético é inventado para dedupe:
sem `event_id`, a notificação segue sem chave.
"""

from __future__ import annotations

import re
from typing import Any

from app.domain.notification import (
    BookingNotification,
    EventKind,
    MalformedNotification,
    ParsedNotification,
)

_EVENT_KIND_RE = re.compile(r"booking\.\w*?(created|updated|cancell?ed)", re.IGNORECASE)

_KIND_BY_WORD = {
    "created": EventKind.CREATED,
    "updated": EventKind.UPDATED,
    "cancelled": EventKind.CANCELLED,
    "canceled": EventKind.CANCELLED,
}

# Caminhos conhecidos do booking id, em ordem de preferência
BOOKING_ID_PATHS: tuple[tuple[str, ...], ...] = (
    ("data", "id"),
    ("data", "object", "booking", "id"),
    ("data", "object", "id"),
)


def classify_event_type(event_type: str) -> EventKind:
    """Mapeia o `type` bruto (ex: booking.created) para EventKind."""
    match = _EVENT_KIND_RE.search(event_type)
    if match is None:
        return EventKind.OTHER
    return _KIND_BY_WORD[match.group(1).lower()]


def _dig(payload: dict[str, Any], path: tuple[str, ...]) -> Any:
    node: Any = payload
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _non_empty_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def extract_booking_id(payload: dict[str, Any]) -> str | None:
    """Retorna o primeiro booking id presente nos caminhos conhecidos."""
    for path in BOOKING_ID_PATHS:
        booking_id = _non_empty_str(_dig(payload, path))
        if booking_id is not None:
            return booking_id
    return None


def parse_notification(payload: object) -> ParsedNotification:
    """Normaliza o payload do webhook.

    Args:
        payload: JSON já decodificado do corpo do request.

    Returns:
        BookingNotification ou MalformedNotification (nunca None).
    """
    if not isinstance(payload, dict):
        return MalformedNotification(reason="payload_not_object")

    event_type = _non_empty_str(payload.get("type"))
    if event_type is None:
        return MalformedNotification(reason="missing_event_type")

    booking_id = extract_booking_id(payload)
    if booking_id is None:
        return MalformedNotification(reason="missing_booking_id", raw_event_type=event_type)

    return BookingNotification(
        notification_id=_non_empty_str(payload.get("event_id")),
        event_kind=classify_event_type(event_type),
        raw_event_type=event_type,
        booking_id=booking_id,
    )
