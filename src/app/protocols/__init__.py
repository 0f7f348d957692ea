"""Protocolos e contratos do core da aplicação."""

from .booking_source import BookingSourceProtocol
from .calendar_store import CalendarStoreProtocol
from .dedupe import DedupeProtocol
from .notifier import NotifierProtocol

__all__ = [
    "BookingSourceProtocol",
    "CalendarStoreProtocol",
    "DedupeProtocol",
    "NotifierProtocol",
]
