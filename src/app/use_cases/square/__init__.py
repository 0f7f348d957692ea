"""Use cases do fluxo Square -> calendário."""

from .sync_booking import (
    AcknowledgePolicy,
    NotificationPolicy,
    SyncBookingUseCase,
    SyncResult,
)

__all__ = [
    "AcknowledgePolicy",
    "NotificationPolicy",
    "SyncBookingUseCase",
    "SyncResult",
]
