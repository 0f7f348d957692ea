"""Settings de dedupe de notificações.

A janela padrão é curta (10 min): protege contra reenvios próximos do
Square, não contra replays tardios.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

DedupeBackend = Literal["memory", "redis"]

DEFAULT_DEDUPE_TTL_SECONDS = 600


@dataclass(frozen=True)
class DedupeSettings:
    """Configurações de dedupe.

    Attributes:
        backend: Backend para dedupe (memory|redis)
        ttl_seconds: Janela em que um notification id repetido é ignorado
    """

    backend: DedupeBackend = "memory"
    ttl_seconds: int = DEFAULT_DEDUPE_TTL_SECONDS

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de dedupe.

        Args:
            base: BaseSettings para verificar dependências.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        if self.backend not in {"memory", "redis"}:
            errors.append(f"DEDUPE_BACKEND inválido: {self.backend}")
        if self.backend == "redis" and not base.redis_url:
            errors.append("DEDUPE_BACKEND=redis requer REDIS_URL configurado")
        if self.ttl_seconds <= 0:
            errors.append("DEDUPE_TTL_SECONDS deve ser > 0")
        return errors


def _load_dedupe_from_env() -> DedupeSettings:
    backend_str = os.getenv("DEDUPE_BACKEND", "memory").strip().lower()
    backend: DedupeBackend = "redis" if backend_str == "redis" else "memory"
    return DedupeSettings(
        backend=backend,
        ttl_seconds=int(os.getenv("DEDUPE_TTL_SECONDS", str(DEFAULT_DEDUPE_TTL_SECONDS))),
    )


@lru_cache(maxsize=1)
def get_dedupe_settings() -> DedupeSettings:
    """Retorna instância cacheada de DedupeSettings."""
    return _load_dedupe_from_env()
