"""Stores — implementações concretas de dedupe.

Módulos disponíveis:
    - memory_stores: janela em memória (padrão, volátil)
    - redis_dedupe_store: janela compartilhada via Redis (opcional)
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryDedupeStore
from app.infra.stores.redis_dedupe_store import RedisDedupeStore

__all__ = [
    "MemoryDedupeStore",
    "RedisDedupeStore",
]
