"""Store de dedupe em memória (padrão do serviço).

Volátil: um restart do processo perde todas as entradas. Não é seguro
para múltiplos escritores concorrentes sem sincronização externa; o
webhook processa uma notificação por vez.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from app.protocols.dedupe import DedupeProtocol

if TYPE_CHECKING:
    from collections.abc import Callable


class MemoryDedupeStore(DedupeProtocol):
    """Janela deslizante em memória: key -> expires_at.

    Args:
        clock: Fonte de tempo em segundos (injetável para testes).
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._store: dict[str, float] = {}
        self._clock = clock

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def _cleanup_expired(self, now: float) -> None:
        """Remove entradas expiradas (purge preguiçoso, nunca agendado)."""
        expired = [k for k, expires_at in self._store.items() if expires_at <= now]
        for k in expired:
            del self._store[k]

    def seen(self, key: str, ttl: int) -> bool:
        now = self._clock()
        self._cleanup_expired(now)
        if key in self._store:
            return True  # Duplicado; expiração não é renovada
        self._store[key] = now + ttl
        return False

    def forget(self, key: str) -> None:
        self._store.pop(key, None)
