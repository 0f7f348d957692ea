"""Serviços de aplicação.

Unidades reutilizáveis e deterministas (sem IO direto).
Implementações concretas de IO ficam em app/infra/ e api/connectors/.
"""

from app.services.booking_status import classify_booking
from app.services.dedupe_gate import DedupeGate
from app.services.event_projector import EventProjector, build_uid

__all__ = [
    "DedupeGate",
    "EventProjector",
    "build_uid",
    "classify_booking",
]
