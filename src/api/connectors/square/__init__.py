"""Connector Square — adapter de borda para Bookings/Customers e webhooks.

Responsabilidades:
- Parse das notificações de webhook (uniao rotulada)
- Validação de assinatura HMAC
- Cliente HTTP de leitura de bookings e customers
"""

from api.connectors.square.http_client import (
    SquareBookingClient,
    create_square_booking_client,
)
from api.connectors.square.notification import (
    classify_event_type,
    extract_booking_id,
    parse_notification,
)
from api.connectors.square.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookRequestError,
    parse_webhook_request,
)
from api.connectors.square.signature import SignatureResult, verify_square_signature

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "SignatureResult",
    "SquareBookingClient",
    "WebhookRequestError",
    "classify_event_type",
    "create_square_booking_client",
    "extract_booking_id",
    "parse_notification",
    "parse_webhook_request",
    "verify_square_signature",
]
