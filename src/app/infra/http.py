"""Cliente HTTP base para conectores externos (Square, CalDAV).

Retry com backoff exponencial apenas para falhas transitórias:
timeouts, erros de conexão, 429 e 5xx. Os demais status são devolvidos
ao chamador, que decide o significado (ex: 404 em DELETE é sucesso).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 15.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    follow_redirects: bool = False


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


def is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


class HttpClient:
    """Cliente HTTP simples para chamadas externas.

    Args:
        config: Timeouts, retries e headers padrão.
        auth: Autenticação httpx aplicada a todas as requisições.
        transport: Transport httpx alternativo (ex: MockTransport em testes).
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        *,
        auth: httpx.Auth | tuple[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._auth = auth
        self._transport = transport

    async def request(
        self,
        method: str,
        url: str,
        *,
        content: str | bytes | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Executa a requisição com retry para falhas transitórias.

        Raises:
            HttpError: Retries esgotados (status retryable ou falha de conexão).
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        for attempt in range(self._config.max_retries + 1):
            try:
                async with httpx.AsyncClient(
                    verify=self._config.verify_ssl,
                    follow_redirects=self._config.follow_redirects,
                    auth=self._auth,
                    transport=self._transport,
                    timeout=self._config.timeout_seconds,
                ) as client:
                    response = await client.request(
                        method,
                        url,
                        content=content,
                        json=json,
                        headers=merged_headers,
                    )
                if is_retryable_status(response.status_code):
                    raise HttpError(
                        "http_retryable_status",
                        status_code=response.status_code,
                        is_retryable=True,
                    )
                return response
            except HttpError as exc:
                if attempt >= self._config.max_retries:
                    raise
                logger.info(
                    "http_retry_scheduled",
                    extra={"method": method, "status_code": exc.status_code, "attempt": attempt},
                )
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
            except (httpx.TimeoutException, httpx.TransportError) as exc:
                if attempt >= self._config.max_retries:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
                logger.info(
                    "http_retry_scheduled",
                    extra={"method": method, "error_type": type(exc).__name__, "attempt": attempt},
                )
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
        raise HttpError("http_retry_exhausted", is_retryable=True)


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("http_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
