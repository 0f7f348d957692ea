"""Agregador de settings base."""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
    parse_bool,
    parse_environment,
)
from config.settings.base.dedupe import (
    DEFAULT_DEDUPE_TTL_SECONDS,
    DedupeBackend,
    DedupeSettings,
    get_dedupe_settings,
)

__all__ = [
    "DEFAULT_DEDUPE_TTL_SECONDS",
    "BaseSettings",
    "DedupeBackend",
    "DedupeSettings",
    "Environment",
    "get_base_settings",
    "get_dedupe_settings",
    "parse_bool",
    "parse_environment",
]
