"""Erros específicos do conector CalDAV.

Todos herdam de TransientUpstreamError: para o orquestrador, qualquer
falha do store é uma falha de upstream e o resultado é ``failed``.
"""

from __future__ import annotations

from utils.errors import TransientUpstreamError


class CalDavError(TransientUpstreamError):
    """Base para falhas do store CalDAV."""


class CalDavAuthError(CalDavError):
    """Credenciais recusadas (401/403)."""


class CalendarNotFoundError(CalDavError):
    """Discovery não encontrou nenhum calendário na conta."""


class CalDavRequestError(CalDavError):
    """Status não-sucesso em PUT/DELETE/PROPFIND."""
