"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigurationMissingError,
    InfrastructureError,
    NotFoundError,
    RedisConnectionError,
    TransientUpstreamError,
)

__all__ = [
    "ConfigurationMissingError",
    "InfrastructureError",
    "NotFoundError",
    "RedisConnectionError",
    "TransientUpstreamError",
]
