"""Contrato do canal lateral de notificação (email)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NotifierProtocol(Protocol):
    """Envia uma mensagem curta com anexo iCalendar opcional.

    Implementações ausentes ou mal configuradas devem virar no-op.
    """

    @property
    def enabled(self) -> bool:
        """True quando o canal está configurado para enviar."""
        ...

    async def send(
        self,
        *,
        subject: str,
        body: str,
        ics_document: str | None = None,
        ics_filename: str = "event.ics",
    ) -> None:
        """Envia a mensagem."""
        ...
