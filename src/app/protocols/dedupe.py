"""Protocolo de domínio para stores de dedupe.

Interface leve (ABC) dependida pelo DedupeGate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class DedupeProtocol(ABC):
    """Contrato mínimo síncrono para stores de deduplicação.

    Métodos canônicos:
    - seen(key, ttl) -> bool
      Retorna True se a chave já foi vista e não expirou (duplicado), sem
      renovar a expiração. Se não vista, marca-a com TTL e retorna False.
    - forget(key) -> None
      Remove a marca (ex.: processamento falhou e o reenvio deve passar).
    """

    @abstractmethod
    def seen(self, key: str, ttl: int) -> bool:
        """Verifica e marca a chave de forma atômica.

        Args:
            key: Chave única (notification id do Square)
            ttl: TTL em segundos

        Returns:
            True se já foi vista (duplicado); False se foi marcada agora (novo).
        """

    @abstractmethod
    def forget(self, key: str) -> None:
        """Remove a chave, se existir."""
