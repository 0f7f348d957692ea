"""Validação de assinatura HMAC-SHA256 dos webhooks do Square.

O Square assina `notification_url + corpo bruto` com a signature key da
subscription e envia o digest em base64 no header
`x-square-hmacsha256-signature`.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "x-square-hmacsha256-signature"


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da validação de assinatura."""

    valid: bool
    skipped: bool = False
    error: str | None = None


def compute_square_signature(signature_key: str, notification_url: str, body: bytes) -> str:
    """Calcula a assinatura esperada (base64 do HMAC-SHA256)."""
    digest = hmac.new(
        signature_key.encode("utf-8"),
        notification_url.encode("utf-8") + body,
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_square_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    signature_key: str | None,
    notification_url: str,
) -> SignatureResult:
    """Valida a assinatura do webhook.

    Sem signature key configurada a validação é pulada (ambiente local).

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos (chaves em minúsculas)
        signature_key: Signature key da subscription
        notification_url: URL exata registrada no Square
    """
    if not signature_key:
        return SignatureResult(valid=True, skipped=True)

    received = headers.get(SIGNATURE_HEADER, "")
    if not received:
        return SignatureResult(valid=False, error="missing_signature")

    expected = compute_square_signature(signature_key, notification_url, raw_body)
    if not hmac.compare_digest(expected, received.strip()):
        return SignatureResult(valid=False, error="signature_mismatch")
    return SignatureResult(valid=True)
