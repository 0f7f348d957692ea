"""Redis Dedupe Store — janela de dedupe compartilhada entre processos.

Usado apenas com DEDUPE_BACKEND=redis. Usa SET NX EX: a chave só é
criada se não existir, e o TTL não é renovado em duplicados.

Contrato de Keys:
    As keys são notification ids opacos do Square. Nunca passar PII.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.dedupe import DedupeProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis import Redis

logger = logging.getLogger(__name__)

DEDUPE_PREFIX = "booking-sync:dedupe:"


class RedisDedupeStore(DedupeProtocol):
    """Store de dedupe usando Redis.

    Args:
        redis_client: Cliente Redis síncrono
    """

    def __init__(self, redis_client: Redis) -> None:
        self._redis = redis_client

    def _key(self, key: str) -> str:
        return f"{DEDUPE_PREFIX}{key}"

    def seen(self, key: str, ttl: int) -> bool:
        """Verifica e marca chave atomicamente.

        Returns:
            True se duplicado, False se novo
        """
        try:
            # SET NX retorna True se criou (novo), None se já existia (duplicado)
            was_set = self._redis.set(self._key(key), "1", nx=True, ex=ttl)
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar dedupe no Redis") from exc
        is_duplicate = not was_set
        if is_duplicate:
            key_masked = key[:8] + "..." if len(key) > 8 else key
            logger.debug("dedupe_duplicate_detected", extra={"key": key_masked})
        return is_duplicate

    def forget(self, key: str) -> None:
        try:
            self._redis.delete(self._key(key))
        except Exception as exc:
            raise RedisConnectionError("Falha ao remover chave de dedupe no Redis") from exc
