"""Notificacao inbound normalizada (uniao rotulada).

`parse_notification` devolve `BookingNotification` ou
`MalformedNotification`; nunca None.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EventKind(str, Enum):
    """Tipo de evento reconhecido pelo pipeline."""

    CREATED = "created"
    UPDATED = "updated"
    CANCELLED = "cancelled"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class BookingNotification:
    """Notificacao valida sobre um booking."""

    notification_id: str | None
    event_kind: EventKind
    raw_event_type: str
    booking_id: str


@dataclass(frozen=True, slots=True)
class MalformedNotification:
    """Payload sem identificadores minimos ou com forma desconhecida."""

    reason: str
    raw_event_type: str | None = None


ParsedNotification = BookingNotification | MalformedNotification

__all__ = [
    "BookingNotification",
    "EventKind",
    "MalformedNotification",
    "ParsedNotification",
]
