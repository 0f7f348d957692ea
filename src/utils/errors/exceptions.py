"""Exceções compartilhadas para falhas de infraestrutura e configuração."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class TransientUpstreamError(InfrastructureError):
    """Falha de rede, timeout ou status não-sucesso de um serviço externo.

    Args:
        message: Descrição curta sem dados sensíveis.
        status_code: Status HTTP quando houve resposta.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class ConfigurationMissingError(RuntimeError):
    """Estado obrigatório de configuração/autenticação indisponível."""


class NotFoundError(LookupError):
    """Registro externo inexistente (booking ou customer)."""

    def __init__(self, resource: str, resource_id: str) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.resource_id = resource_id
