"""Filters de logging para injeção de contexto e mascaramento de PII.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço

Campos mascarados (quando passados via `extra`):
- nomes, telefones, emails, tokens e senhas
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

DEFAULT_SENSITIVE_FIELDS = frozenset(
    {
        "access_token",
        "app_specific_password",
        "customer_name",
        "email",
        "family_name",
        "given_name",
        "password",
        "phone",
        "phone_number",
        "to_emails",
    }
)

MASK = "***"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        # correlation_id explícito via `extra` tem prioridade
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Mascara atributos sensíveis adicionados ao record via `extra`.

    Não altera a mensagem formatada: as mensagens são nomes de evento
    e nunca carregam dados do cliente.
    """

    def __init__(self, fields: Iterable[str] = DEFAULT_SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._fields = frozenset(fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for name in self._fields:
            value = record.__dict__.get(name)
            if value:
                record.__dict__[name] = MASK
        return True
