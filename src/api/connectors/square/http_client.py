"""Cliente HTTP do Square para leitura de bookings e customers.

Estende HttpClient genérico com:
- Headers Authorization (Bearer) e Square-Version
- 404 -> NotFoundError; 401/403 -> ConfigurationMissingError
- Demais falhas -> TransientUpstreamError (após retries do HttpClient)
- Logging estruturado sem PII
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from api.connectors.square.parsers import parse_booking, parse_customer
from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.observability import get_correlation_id, record_latency
from utils.errors import ConfigurationMissingError, NotFoundError, TransientUpstreamError

if TYPE_CHECKING:
    import httpx

    from app.domain.booking import Booking, Customer
    from config.settings import SquareSettings

logger = logging.getLogger(__name__)

_COMPONENT = "square_client"


class SquareBookingClient(HttpClient):
    """Implementação de BookingSourceProtocol via Square API v2.

    Args:
        access_token: Token de acesso (Bearer)
        api_base_url: URL base (ex: https://connect.squareup.com/v2)
        api_version: Header Square-Version
        config: Configuração HTTP base
        transport: Transport httpx alternativo (testes)
    """

    def __init__(
        self,
        *,
        access_token: str,
        api_base_url: str,
        api_version: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, transport=transport)
        self._access_token = access_token
        self._api_base_url = api_base_url.rstrip("/")
        self._api_version = api_version

    async def get_booking(self, booking_id: str) -> Booking:
        body = await self._get_json(f"/bookings/{booking_id}", "booking", booking_id)
        try:
            return parse_booking(body.get("booking") or {})
        except ValidationError as exc:
            raise TransientUpstreamError("square_booking_invalid_payload") from exc

    async def get_customer(self, customer_id: str) -> Customer:
        body = await self._get_json(f"/customers/{customer_id}", "customer", customer_id)
        return parse_customer(body.get("customer") or {})

    def _headers(self) -> dict[str, str]:
        if not self._access_token or not self._access_token.strip():
            raise ConfigurationMissingError(
                "SQUARE_ACCESS_TOKEN é obrigatório para consultar bookings."
            )
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Square-Version": self._api_version,
            "Accept": "application/json",
        }

    async def _get_json(self, path: str, resource: str, resource_id: str) -> dict[str, Any]:
        headers = self._headers()
        started_at = time.perf_counter()
        try:
            response = await self.request("GET", f"{self._api_base_url}{path}", headers=headers)
        except HttpError as exc:
            self._log_error(action=f"get_{resource}", status_code=exc.status_code)
            raise TransientUpstreamError(
                f"square_{resource}_unavailable", status_code=exc.status_code
            ) from exc
        finally:
            record_latency(
                _COMPONENT,
                f"get_{resource}",
                (time.perf_counter() - started_at) * 1000,
                get_correlation_id(),
            )

        if response.status_code == 404:
            raise NotFoundError(resource, resource_id)
        if response.status_code in (401, 403):
            self._log_error(action=f"get_{resource}", status_code=response.status_code)
            raise ConfigurationMissingError(f"square_{resource}_unauthorized")
        if response.status_code >= 400:
            self._log_error(action=f"get_{resource}", status_code=response.status_code)
            raise TransientUpstreamError(
                f"square_{resource}_request_failed", status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise TransientUpstreamError(f"square_{resource}_invalid_json") from exc
        if not isinstance(body, dict):
            raise TransientUpstreamError(f"square_{resource}_invalid_json")
        return body

    def _log_error(self, *, action: str, status_code: int | None) -> None:
        logger.error(
            "square_http_error",
            extra={
                "component": _COMPONENT,
                "action": action,
                "result": "error",
                "status_code": status_code,
                "correlation_id": get_correlation_id(),
            },
        )


def create_square_booking_client(
    settings: SquareSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SquareBookingClient:
    """Factory com config padrão a partir das settings.

    Args:
        settings: SquareSettings opcional. Se None, carrega do ambiente.
        transport: Transport httpx alternativo (testes).
    """
    from config.settings import get_square_settings

    square = settings or get_square_settings()
    config = HttpClientConfig(
        timeout_seconds=square.request_timeout_seconds,
        max_retries=square.max_retries,
    )
    return SquareBookingClient(
        access_token=square.access_token,
        api_base_url=square.api_base_url,
        api_version=square.api_version,
        config=config,
        transport=transport,
    )
