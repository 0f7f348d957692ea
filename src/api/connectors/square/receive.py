"""Parse e validação inicial do webhook do Square (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from api.connectors.square.signature import SignatureResult, verify_square_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """Corpo do webhook não é JSON."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    signature_key: str | None,
    notification_url: str,
) -> tuple[Any, SignatureResult]:
    """Valida assinatura e decodifica o JSON do webhook.

    JSON que não é objeto é devolvido como está: o use case o classifica
    como notificação malformada.

    Raises:
        InvalidSignatureError: Se a assinatura for inválida
        InvalidJsonError: Se o corpo não for JSON

    Returns:
        (payload, SignatureResult)
    """
    signature_result = verify_square_signature(
        raw_body, headers, signature_key, notification_url
    )
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc
    return payload, signature_result
