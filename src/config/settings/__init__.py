"""Agregador de settings do serviço de sincronização.

Re-exporta todas as settings e funções de cada módulo.
Organização por conector para isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.apple_calendar import (
    APPLE_CALDAV_BASE_URL,
    AppleCalendarSettings,
    get_apple_calendar_settings,
)
from config.settings.base import (
    BaseSettings,
    DedupeBackend,
    DedupeSettings,
    Environment,
    get_base_settings,
    get_dedupe_settings,
)
from config.settings.email import EmailSettings, get_email_settings
from config.settings.square import (
    SQUARE_API_BASE_URL,
    SQUARE_API_VERSION,
    SquareSettings,
    get_square_settings,
)
from config.settings.sync import SyncSettings, get_sync_settings

__all__ = [
    # Constants
    "APPLE_CALDAV_BASE_URL",
    "SQUARE_API_BASE_URL",
    "SQUARE_API_VERSION",
    # Base
    "AppleCalendarSettings",
    "BaseSettings",
    "DedupeBackend",
    "DedupeSettings",
    "EmailSettings",
    "Environment",
    "SquareSettings",
    "SyncSettings",
    "get_apple_calendar_settings",
    "get_base_settings",
    "get_dedupe_settings",
    "get_email_settings",
    "get_square_settings",
    "get_sync_settings",
]
