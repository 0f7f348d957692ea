"""Endpoint de webhook do Square.

Endpoints:
- POST /webhooks/square: notificações booking.created/updated/...

Segurança:
- Validação HMAC quando SQUARE_WEBHOOK_SIGNATURE_KEY está configurada
- Resposta 200 mesmo em falha interna (AcknowledgePolicy), para que o
  Square não entre em tempestade de retries
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from api.connectors.square.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from api.routes.square.webhook_runtime import dispatch_notification
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from app.use_cases.square import AcknowledgePolicy, SyncResult
from app.use_cases.square.sync_booking import OUTCOME_FAILED
from config.settings import get_square_settings, get_sync_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de notificações de booking do Square.

    Validações:
    1. Assinatura HMAC (x-square-hmacsha256-signature)
    2. JSON válido

    Processamento:
    - async: agenda em background e responde 200 imediatamente
    - inline: aguarda o resultado; o status segue a AcknowledgePolicy
    """
    correlation_id = request.headers.get("x-correlation-id")
    token = set_correlation_id(correlation_id)

    try:
        square = get_square_settings()
        ack_policy = AcknowledgePolicy(always_acknowledge=get_sync_settings().always_acknowledge)
        raw_body = await request.body()
        headers = dict(request.headers)

        try:
            payload, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=headers,
                signature_key=square.webhook_signature_key or None,
                notification_url=square.webhook_notification_url or str(request.url),
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={
                    "channel": "square",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={
                    "channel": "square",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            if ack_policy.always_acknowledge:
                return {"status": "ignored", "correlation_id": get_correlation_id()}
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "channel": "square",
                "correlation_id": get_correlation_id(),
                "signature_valid": signature_result.valid,
                "signature_skipped": signature_result.skipped,
                "payload_size": len(raw_body),
            },
        )

        try:
            result = await dispatch_notification(
                payload=payload,
                correlation_id=get_correlation_id(),
                processing_mode=square.webhook_processing_mode,
            )
        except Exception as exc:
            # Falha de wiring (ex: credenciais ausentes) antes do use case
            logger.exception(
                "webhook_dispatch_failed",
                extra={
                    "channel": "square",
                    "correlation_id": get_correlation_id(),
                    "error_type": type(exc).__name__,
                },
            )
            result = SyncResult(outcome=OUTCOME_FAILED, reason=type(exc).__name__)

        if result is None:
            return {"status": "received", "correlation_id": get_correlation_id()}

        status_code = ack_policy.status_code_for(result)
        if status_code != status.HTTP_200_OK:
            return Response(
                content="Processing failed",
                media_type="text/plain",
                status_code=status_code,
            )
        return {
            "status": "processed",
            "outcome": result.outcome,
            "correlation_id": get_correlation_id(),
        }

    finally:
        reset_correlation_id(token)
