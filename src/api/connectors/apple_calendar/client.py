"""Cliente CalDAV (iCloud) para gravar e remover eventos de booking.

Estende HttpClient genérico com:
- Basic auth (Apple ID + senha específica de app)
- Discovery cacheado do calendário alvo (invalidate() força nova busca)
- PUT idempotente por UID, sem If-Match / If-None-Match
- DELETE tolerante: 404/410 contam como sucesso
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from api.connectors.apple_calendar.discovery import (
    CALENDARS_BODY,
    HOME_SET_BODY,
    PRINCIPAL_BODY,
    DiscoveredCalendar,
    DiscoveryParseError,
    absolute_url,
    collection_url,
    extract_calendar_home_href,
    extract_calendars,
    extract_principal_href,
    select_calendar,
)
from api.connectors.apple_calendar.errors import (
    CalDavAuthError,
    CalDavRequestError,
    CalendarNotFoundError,
)
from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.observability import get_correlation_id, record_latency
from utils.errors import ConfigurationMissingError, TransientUpstreamError

if TYPE_CHECKING:
    from config.settings import AppleCalendarSettings

logger = logging.getLogger(__name__)

_COMPONENT = "caldav_client"

ICS_CONTENT_TYPE = "text/calendar; charset=utf-8"
XML_CONTENT_TYPE = "application/xml; charset=utf-8"

PUT_SUCCESS = frozenset({200, 201, 204})
DELETE_SUCCESS = frozenset({200, 202, 204})
DELETE_ALREADY_GONE = frozenset({404, 410})
STALE_COLLECTION = frozenset({404, 409, 410})


def object_filename(uid: str) -> str:
    """Nome do recurso .ics no calendário (UID percent-encoded, '@' mantido)."""
    return quote(f"{uid}.ics", safe="@")


class CalDavCalendarClient(HttpClient):
    """Implementação de CalendarStoreProtocol via CalDAV.

    Args:
        username: Apple ID
        password: Senha específica de app
        server_url: Raiz do servidor CalDAV
        calendar_name: Display name do calendário alvo
        config: Configuração HTTP base
        transport: Transport httpx alternativo (testes)
    """

    def __init__(
        self,
        *,
        username: str,
        password: str,
        server_url: str,
        calendar_name: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not username or not password:
            raise ConfigurationMissingError(
                "APPLE_CALENDAR_APPLE_ID e APPLE_CALENDAR_APP_SPECIFIC_PASSWORD são obrigatórios."
            )
        if not server_url:
            raise ConfigurationMissingError("APPLE_CALENDAR_CALDAV_URL é obrigatório.")
        config = config or HttpClientConfig()
        config.follow_redirects = True
        super().__init__(config, auth=httpx.BasicAuth(username, password), transport=transport)
        self._server_url = server_url if server_url.endswith("/") else f"{server_url}/"
        self._calendar_name = calendar_name
        self._calendar: DiscoveredCalendar | None = None

    @property
    def calendar(self) -> DiscoveredCalendar | None:
        """Calendário em cache (None antes do primeiro discover)."""
        return self._calendar

    def invalidate(self) -> None:
        self._calendar = None

    async def discover(self) -> DiscoveredCalendar:
        """Resolve a URL do calendário alvo, usando o cache quando existir.

        Raises:
            CalDavAuthError: Credenciais recusadas.
            CalendarNotFoundError: Conta sem calendários.
            CalDavRequestError: PROPFIND com status inesperado ou XML inválido.
        """
        if self._calendar is not None:
            return self._calendar

        principal_response = await self._propfind(self._server_url, PRINCIPAL_BODY, depth="0")
        principal_href = self._extract(extract_principal_href, principal_response)
        if not principal_href:
            raise CalDavRequestError("caldav_principal_not_found")
        principal_url = absolute_url(str(principal_response.url), principal_href)

        home_response = await self._propfind(principal_url, HOME_SET_BODY, depth="0")
        home_href = self._extract(extract_calendar_home_href, home_response)
        if not home_href:
            raise CalDavRequestError("caldav_calendar_home_not_found")
        home_url = collection_url(str(home_response.url), home_href)

        calendars_response = await self._propfind(home_url, CALENDARS_BODY, depth="1")
        try:
            calendars = extract_calendars(calendars_response.content, str(calendars_response.url))
        except DiscoveryParseError as exc:
            raise CalDavRequestError("caldav_invalid_multistatus") from exc

        selected = select_calendar(calendars, self._calendar_name)
        if selected is None:
            raise CalendarNotFoundError("caldav_no_calendars")
        if selected.display_name.strip() != self._calendar_name.strip():
            logger.warning(
                "caldav_calendar_name_fallback",
                extra={
                    "component": _COMPONENT,
                    "action": "discover",
                    "result": "fallback",
                    "calendars_found": len(calendars),
                    "correlation_id": get_correlation_id(),
                },
            )
        logger.info(
            "caldav_calendar_discovered",
            extra={
                "component": _COMPONENT,
                "action": "discover",
                "result": "ok",
                "correlation_id": get_correlation_id(),
            },
        )
        self._calendar = selected
        return selected

    async def object_url(self, uid: str) -> str:
        calendar = await self.discover()
        return f"{calendar.url}{object_filename(uid)}"

    async def upsert(self, uid: str, document: str) -> str | None:
        """Grava (cria ou substitui) o evento do UID.

        Uma coleção que sumiu (404/409/410) provoca novo discovery e uma
        única nova tentativa.

        Returns:
            ETag devolvido pelo servidor, se houver.
        """
        response = await self._put(await self.object_url(uid), document)
        if response.status_code in STALE_COLLECTION:
            logger.info(
                "caldav_collection_stale",
                extra={
                    "component": _COMPONENT,
                    "action": "upsert",
                    "status_code": response.status_code,
                    "correlation_id": get_correlation_id(),
                },
            )
            self.invalidate()
            response = await self._put(await self.object_url(uid), document)

        if response.status_code not in PUT_SUCCESS:
            self._raise_for_status(response, action="upsert")
        return response.headers.get("ETag")

    async def delete(self, uid: str) -> None:
        """Remove o evento do UID; ausência no servidor não é erro."""
        url = await self.object_url(uid)
        response = await self._send("DELETE", url, action="delete")
        if response.status_code in DELETE_ALREADY_GONE:
            logger.info(
                "caldav_object_missing",
                extra={
                    "component": _COMPONENT,
                    "action": "delete",
                    "status_code": response.status_code,
                    "correlation_id": get_correlation_id(),
                },
            )
            return
        if response.status_code not in DELETE_SUCCESS:
            self._raise_for_status(response, action="delete")

    async def _put(self, url: str, document: str) -> httpx.Response:
        return await self._send(
            "PUT",
            url,
            action="upsert",
            content=document.encode("utf-8"),
            headers={"Content-Type": ICS_CONTENT_TYPE},
        )

    async def _propfind(self, url: str, body: str, *, depth: str) -> httpx.Response:
        response = await self._send(
            "PROPFIND",
            url,
            action="discover",
            content=body.encode("utf-8"),
            headers={"Content-Type": XML_CONTENT_TYPE, "Depth": depth},
        )
        if response.status_code != 207:
            self._raise_for_status(response, action="discover")
        return response

    async def _send(
        self,
        method: str,
        url: str,
        *,
        action: str,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        started_at = time.perf_counter()
        try:
            return await self.request(method, url, content=content, headers=headers)
        except HttpError as exc:
            self._log_error(action=action, status_code=exc.status_code)
            raise TransientUpstreamError(
                f"caldav_{action}_unavailable", status_code=exc.status_code
            ) from exc
        finally:
            record_latency(
                _COMPONENT,
                action,
                (time.perf_counter() - started_at) * 1000,
                get_correlation_id(),
            )

    @staticmethod
    def _extract(extractor, response: httpx.Response) -> str | None:
        try:
            return extractor(response.content)
        except DiscoveryParseError as exc:
            raise CalDavRequestError("caldav_invalid_multistatus") from exc

    def _raise_for_status(self, response: httpx.Response, *, action: str) -> None:
        self._log_error(action=action, status_code=response.status_code)
        if response.status_code in (401, 403):
            raise CalDavAuthError(f"caldav_{action}_unauthorized", status_code=response.status_code)
        raise CalDavRequestError(f"caldav_{action}_failed", status_code=response.status_code)

    def _log_error(self, *, action: str, status_code: int | None) -> None:
        logger.error(
            "caldav_http_error",
            extra={
                "component": _COMPONENT,
                "action": action,
                "result": "error",
                "status_code": status_code,
                "correlation_id": get_correlation_id(),
            },
        )


def create_caldav_client(
    settings: AppleCalendarSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CalDavCalendarClient:
    """Factory com config padrão a partir das settings.

    Raises:
        ConfigurationMissingError: Credenciais ou URL ausentes.
    """
    from config.settings import get_apple_calendar_settings

    apple = settings or get_apple_calendar_settings()
    config = HttpClientConfig(
        timeout_seconds=apple.request_timeout_seconds,
        max_retries=apple.max_retries,
        follow_redirects=True,
    )
    return CalDavCalendarClient(
        username=apple.apple_id,
        password=apple.app_specific_password,
        server_url=apple.caldav_url,
        calendar_name=apple.calendar_name,
        config=config,
        transport=transport,
    )
