"""Settings específicas de Apple Calendar (CalDAV/iCloud).

A senha deve ser uma senha específica de app gerada em appleid.apple.com;
a senha da conta não funciona com CalDAV.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

APPLE_CALDAV_BASE_URL: str = "https://caldav.icloud.com"
DEFAULT_CALENDAR_NAME: str = "Lil’s Bookings"


@dataclass(frozen=True)
class AppleCalendarSettings:
    """Configurações do calendário alvo (CalDAV).

    Attributes:
        apple_id: Apple ID (email)
        app_specific_password: Senha específica de app
        caldav_url: URL do servidor CalDAV
        calendar_name: Display name do calendário alvo
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de erro transitório
    """

    apple_id: str = ""
    app_specific_password: str = ""

    caldav_url: str = APPLE_CALDAV_BASE_URL
    calendar_name: str = DEFAULT_CALENDAR_NAME

    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    @property
    def has_credentials(self) -> bool:
        """Retorna True se Apple ID e senha de app estão configurados."""
        return bool(self.apple_id and self.app_specific_password)

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Apple Calendar."""
        errors: list[str] = []
        if not self.apple_id:
            errors.append("APPLE_CALENDAR_APPLE_ID não configurado")
        if not self.app_specific_password:
            errors.append("APPLE_CALENDAR_APP_SPECIFIC_PASSWORD não configurado")
        if not self.caldav_url.startswith(("https://", "http://")):
            errors.append("APPLE_CALENDAR_CALDAV_URL deve ser uma URL absoluta")
        if self.request_timeout_seconds <= 0:
            errors.append("APPLE_CALENDAR_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        return errors


def _load_from_env() -> AppleCalendarSettings:
    """Carrega AppleCalendarSettings de variáveis de ambiente."""
    return AppleCalendarSettings(
        apple_id=os.getenv("APPLE_CALENDAR_APPLE_ID", "").strip(),
        app_specific_password=os.getenv("APPLE_CALENDAR_APP_SPECIFIC_PASSWORD", "").strip(),
        caldav_url=os.getenv("APPLE_CALENDAR_CALDAV_URL", APPLE_CALDAV_BASE_URL),
        calendar_name=os.getenv("APPLE_CALENDAR_NAME", DEFAULT_CALENDAR_NAME),
        request_timeout_seconds=float(
            os.getenv("APPLE_CALENDAR_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("APPLE_CALENDAR_MAX_RETRIES", "3")),
    )


@lru_cache(maxsize=1)
def get_apple_calendar_settings() -> AppleCalendarSettings:
    """Retorna instância cacheada de AppleCalendarSettings."""
    return _load_from_env()
