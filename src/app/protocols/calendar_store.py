"""Contrato do store de calendario remoto.

Mantemos apenas o protocolo aqui para permitir troca de provider sem
impactar o orquestrador. Ambas as operacoes sao idempotentes por uid.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CalendarStoreProtocol(Protocol):
    """Escrita e remocao de objetos de calendario enderecados por uid."""

    async def upsert(self, uid: str, document: str) -> str | None:
        """Grava o documento (cria ou sobrescreve) e retorna o ETag, se houver."""
        ...

    async def delete(self, uid: str) -> None:
        """Remove o objeto; objeto inexistente conta como sucesso."""
        ...
