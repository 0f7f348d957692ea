"""Settings específicas do Square (Bookings + Customers + webhooks).

Cada conector tem seu próprio arquivo de settings para isolamento.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

SQUARE_API_VERSION: str = "2025-03-19"
SQUARE_API_BASE_URL: str = "https://connect.squareup.com/v2"


@dataclass(frozen=True)
class SquareSettings:
    """Configurações do conector Square.

    Attributes:
        access_token: Token de acesso à API (Bearer)
        api_version: Header Square-Version
        api_base_url: URL base da API v2 (produção ou sandbox)
        webhook_signature_key: Chave de assinatura da subscription de webhook
        webhook_notification_url: URL pública registrada no Square (entra na assinatura)
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de erro transitório
        webhook_processing_mode: Modo de processamento do webhook (async|inline)
    """

    access_token: str = ""
    api_version: str = SQUARE_API_VERSION
    api_base_url: str = SQUARE_API_BASE_URL

    webhook_signature_key: str = ""
    webhook_notification_url: str = ""

    request_timeout_seconds: float = 10.0
    max_retries: int = 2

    webhook_processing_mode: str = "async"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Square.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.access_token:
            errors.append("SQUARE_ACCESS_TOKEN não configurado")

        if self.webhook_signature_key and not self.webhook_notification_url:
            errors.append(
                "SQUARE_WEBHOOK_NOTIFICATION_URL é obrigatório quando "
                "SQUARE_WEBHOOK_SIGNATURE_KEY está configurado"
            )

        if self.request_timeout_seconds <= 0:
            errors.append("SQUARE_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("SQUARE_MAX_RETRIES deve ser >= 0")

        if self.webhook_processing_mode not in ("async", "inline"):
            errors.append("SQUARE_WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'")

        return errors


def _load_from_env() -> SquareSettings:
    """Carrega SquareSettings a partir de variáveis de ambiente."""
    return SquareSettings(
        access_token=os.getenv("SQUARE_ACCESS_TOKEN", "").strip(),
        api_version=os.getenv("SQUARE_API_VERSION", SQUARE_API_VERSION),
        api_base_url=os.getenv("SQUARE_API_BASE_URL", SQUARE_API_BASE_URL).rstrip("/"),
        webhook_signature_key=os.getenv("SQUARE_WEBHOOK_SIGNATURE_KEY", ""),
        webhook_notification_url=os.getenv("SQUARE_WEBHOOK_NOTIFICATION_URL", ""),
        request_timeout_seconds=float(os.getenv("SQUARE_REQUEST_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("SQUARE_MAX_RETRIES", "2")),
        webhook_processing_mode=os.getenv("SQUARE_WEBHOOK_PROCESSING_MODE", "async")
        .strip()
        .lower(),
    )


@lru_cache(maxsize=1)
def get_square_settings() -> SquareSettings:
    """Retorna instância cacheada de SquareSettings."""
    return _load_from_env()
