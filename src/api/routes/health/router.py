"""Endpoints de health check (liveness e readiness)."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import (
    get_apple_calendar_settings,
    get_base_settings,
    get_dedupe_settings,
    get_square_settings,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: store de dedupe, credenciais Square e CalDAV."""
    dedupe_check = await _check_dedupe(getattr(request.app.state, "redis_client", None))
    square_check = _check_configured(bool(get_square_settings().access_token))
    calendar_check = _check_configured(get_apple_calendar_settings().has_credentials)

    ready = all(
        check.status == "ok" for check in (dedupe_check, square_check, calendar_check)
    )
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "dedupe": dedupe_check.as_dict(),
            "square": square_check.as_dict(),
            "calendar": calendar_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_configured(configured: bool) -> DependencyCheck:
    if configured:
        return DependencyCheck(status="ok")
    return DependencyCheck(status="failed", error="not_configured")


async def _check_dedupe(redis_client: Any | None) -> DependencyCheck:
    if get_dedupe_settings().backend != "redis":
        return DependencyCheck(status="ok")
    if redis_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(asyncio.to_thread(redis_client.ping), timeout=2.0)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        logger.warning("readiness_redis_check_failed", extra={"error_type": type(exc).__name__})
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))
