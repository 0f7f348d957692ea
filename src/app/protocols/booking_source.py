"""Contrato de leitura de bookings e customers.

O provider concreto (Square) fica na camada api; o caso de uso depende
apenas deste protocolo.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.booking import Booking, Customer


@runtime_checkable
class BookingSourceProtocol(Protocol):
    """Fonte somente-leitura de bookings e customers.

    Ambos os métodos levantam `NotFoundError` quando o registro não existe e
    `TransientUpstreamError` em falhas de rede/status.
    """

    async def get_booking(self, booking_id: str) -> Booking:
        """Busca o snapshot atual do booking."""
        ...

    async def get_customer(self, customer_id: str) -> Customer:
        """Busca o snapshot atual do customer."""
        ...
