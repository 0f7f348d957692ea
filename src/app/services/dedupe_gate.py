"""Gate de dedupe de notificacoes do Square.

Filtro de janela deslizante sobre um DedupeProtocol. Nao e um supressor
duravel: com o store em memoria, um restart perde o estado.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.settings.base.dedupe import DEFAULT_DEDUPE_TTL_SECONDS

if TYPE_CHECKING:
    from app.protocols.dedupe import DedupeProtocol

logger = logging.getLogger(__name__)


class DedupeGate:
    """Decide se uma notificacao deve ser processada.

    Args:
        store: Store de dedupe (memoria ou Redis).
        ttl_seconds: Janela em que um id repetido e ignorado.
    """

    def __init__(
        self,
        store: DedupeProtocol,
        ttl_seconds: int = DEFAULT_DEDUPE_TTL_SECONDS,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds deve ser > 0")
        self._store = store
        self._ttl_seconds = ttl_seconds

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def should_process(self, notification_id: str | None) -> bool:
        """Retorna False apenas para um id ja visto dentro da janela.

        Sem id nao ha como deduplicar: a notificacao sempre passa.
        """
        if not notification_id:
            return True
        if self._store.seen(notification_id, self._ttl_seconds):
            logger.info(
                "notification_duplicate_skipped",
                extra={"component": "dedupe_gate", "notification_id": notification_id},
            )
            return False
        return True

    def release(self, notification_id: str | None) -> None:
        """Libera o id para que um reenvio do mesmo evento seja processado."""
        if notification_id:
            self._store.forget(notification_id)
