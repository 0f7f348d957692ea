"""Testes do HttpClient base (retry e backoff)."""

from __future__ import annotations

import httpx
import pytest

from app.infra import http
from app.infra.http import HttpClient, HttpClientConfig, HttpError, is_retryable_status


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    sleeps: list[float] = []

    async def _fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    monkeypatch.setattr(http.asyncio, "sleep", _fake_sleep)
    return sleeps


def _client(handler, **config: object) -> HttpClient:
    return HttpClient(HttpClientConfig(**config), transport=httpx.MockTransport(handler))


@pytest.mark.parametrize(
    ("status_code", "retryable"),
    [(429, True), (500, True), (503, True), (404, False), (409, False), (200, False)],
)
def test_is_retryable_status(status_code: int, retryable: bool) -> None:
    assert is_retryable_status(status_code) is retryable


@pytest.mark.asyncio
async def test_non_retryable_status_returned_to_caller() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(404)

    response = await _client(handler).request("DELETE", "https://example.test/x")

    assert response.status_code == 404
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_exponential_backoff_capped(_no_sleep: list[float]) -> None:
    with pytest.raises(HttpError) as exc_info:
        await _client(
            lambda request: httpx.Response(500),
            max_retries=3,
            backoff_base_seconds=1.0,
            backoff_max_seconds=3.0,
        ).request("GET", "https://example.test/x")

    assert exc_info.value.status_code == 500
    assert exc_info.value.is_retryable is True
    assert _no_sleep == [1.0, 2.0, 3.0]


@pytest.mark.asyncio
async def test_default_headers_merged() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    await _client(handler, default_headers={"X-Default": "1"}).request(
        "GET", "https://example.test/x", headers={"X-Call": "2"}
    )

    assert seen[0].headers["X-Default"] == "1"
    assert seen[0].headers["X-Call"] == "2"


@pytest.mark.asyncio
async def test_timeout_exhausts_retries() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(HttpError, match="http_connection_error"):
        await _client(handler, max_retries=1).request("GET", "https://example.test/x")
