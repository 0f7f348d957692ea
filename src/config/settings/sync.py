"""Settings do pipeline booking -> calendario.

Centralizar a leitura de env aqui evita espalhar rotulos e politicas
pelo orquestrador e pelo projetor de eventos.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from config.settings.base.core import parse_bool

DEFAULT_EVENT_LABEL = "Truck Event"
DEFAULT_UID_NAMESPACE = "lilsicecream"
DEFAULT_PRODUCT_ID = "-//Lils Ice Cream//Bookings//EN"
DEFAULT_DASHBOARD_URL = "https://squareup.com/dashboard/appointments"


class SyncSettings(BaseModel):
    """Configuracoes de projecao e politicas do orquestrador."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    event_label: str = Field(
        default=DEFAULT_EVENT_LABEL,
        min_length=1,
        description="Rotulo fixo no inicio do SUMMARY do evento.",
    )
    uid_namespace: str = Field(
        default=DEFAULT_UID_NAMESPACE,
        min_length=1,
        description="Sufixo do UID: <bookingId>@<namespace>.",
    )
    product_id: str = Field(
        default=DEFAULT_PRODUCT_ID,
        description="PRODID do documento iCalendar.",
    )
    dashboard_url: str = Field(
        default=DEFAULT_DASHBOARD_URL,
        description="Link do painel de agendamentos incluido na DESCRIPTION.",
    )
    notify_on_update: bool = Field(
        default=False,
        description="Envia email tambem em booking.updated (criacao sempre envia).",
    )
    always_acknowledge: bool = Field(
        default=True,
        description="Responde 200 ao Square mesmo quando o processamento falha.",
    )

    def validate_settings(self, processing_mode: str) -> list[str]:
        """Valida combinacoes de politica que dependem do modo do webhook."""
        errors: list[str] = []
        if not self.always_acknowledge and processing_mode != "inline":
            errors.append(
                "SYNC_ALWAYS_ACKNOWLEDGE=false requer SQUARE_WEBHOOK_PROCESSING_MODE=inline"
            )
        return errors


def _load_sync_from_env() -> SyncSettings:
    """Carrega SyncSettings a partir de variaveis de ambiente."""
    return SyncSettings(
        event_label=os.getenv("SYNC_EVENT_LABEL", DEFAULT_EVENT_LABEL),
        uid_namespace=os.getenv("SYNC_UID_NAMESPACE", DEFAULT_UID_NAMESPACE),
        product_id=os.getenv("SYNC_PRODUCT_ID", DEFAULT_PRODUCT_ID),
        dashboard_url=os.getenv("SYNC_DASHBOARD_URL", DEFAULT_DASHBOARD_URL),
        notify_on_update=parse_bool(os.getenv("SYNC_NOTIFY_ON_UPDATE", "false")),
        always_acknowledge=parse_bool(os.getenv("SYNC_ALWAYS_ACKNOWLEDGE", "true")),
    )


@lru_cache(maxsize=1)
def get_sync_settings() -> SyncSettings:
    """Retorna instancia cacheada de SyncSettings."""
    return _load_sync_from_env()


__all__ = ["SyncSettings", "get_sync_settings"]
