"""Configuração do pytest para o serviço de sincronização de bookings."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


_SETTINGS_ENV_NAMES = ("ENVIRONMENT", "REDIS_URL", "SERVICE_NAME")
_SETTINGS_ENV_PREFIXES = (
    "SQUARE_",
    "APPLE_CALENDAR_",
    "EMAIL_",
    "SYNC_",
    "DEDUPE_",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Remove env de settings e limpa os caches lru das settings."""
    import os

    from config.settings.apple_calendar import get_apple_calendar_settings
    from config.settings.base import get_base_settings, get_dedupe_settings
    from config.settings.email import get_email_settings
    from config.settings.square import get_square_settings
    from config.settings.sync import get_sync_settings

    for name in list(os.environ):
        if name.startswith(_SETTINGS_ENV_PREFIXES) or name in _SETTINGS_ENV_NAMES:
            monkeypatch.delenv(name, raising=False)

    getters = (
        get_apple_calendar_settings,
        get_base_settings,
        get_dedupe_settings,
        get_email_settings,
        get_square_settings,
        get_sync_settings,
    )
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()
