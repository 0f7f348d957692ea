"""Settings do canal de notificação por Email (SMTP).

O canal é opcional: sem host, remetente ou destinatário ele vira no-op.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from config.settings.base.core import parse_bool


@dataclass(frozen=True)
class EmailSettings:
    """Configurações do canal Email.

    Attributes:
        smtp_host: Host do servidor SMTP
        smtp_port: Porta do servidor SMTP
        smtp_username: Usuário SMTP
        smtp_password: Senha SMTP
        smtp_use_tls: Usar STARTTLS
        from_email: Email de origem
        from_name: Nome de origem
        to_emails: Destinatários das notificações
        request_timeout_seconds: Timeout de conexão SMTP
    """

    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True

    from_email: str = ""
    from_name: str = ""
    to_emails: tuple[str, ...] = field(default_factory=tuple)

    request_timeout_seconds: float = 30.0

    @property
    def enabled(self) -> bool:
        """Canal só fica ativo com host, remetente e ao menos um destinatário."""
        return bool(self.smtp_host and self.from_email and self.to_emails)

    def validate(self) -> list[str]:
        """Valida configurações de Email (apenas quando parcialmente configurado)."""
        errors: list[str] = []
        configured = any((self.smtp_host, self.from_email, self.to_emails))
        if not configured:
            return errors
        if not self.smtp_host:
            errors.append("EMAIL_SMTP_HOST não configurado")
        if not self.from_email:
            errors.append("EMAIL_FROM_EMAIL não configurado")
        if not self.to_emails:
            errors.append("EMAIL_TO não configurado")
        if self.smtp_username and not self.smtp_password:
            errors.append("EMAIL_SMTP_PASSWORD não configurado")
        return errors


def _split_recipients(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _load_from_env() -> EmailSettings:
    """Carrega EmailSettings de variáveis de ambiente."""
    return EmailSettings(
        smtp_host=os.getenv("EMAIL_SMTP_HOST", "").strip(),
        smtp_port=int(os.getenv("EMAIL_SMTP_PORT", "587")),
        smtp_username=os.getenv("EMAIL_SMTP_USERNAME", ""),
        smtp_password=os.getenv("EMAIL_SMTP_PASSWORD", ""),
        smtp_use_tls=parse_bool(os.getenv("EMAIL_SMTP_USE_TLS", "true")),
        from_email=os.getenv("EMAIL_FROM_EMAIL", "").strip(),
        from_name=os.getenv("EMAIL_FROM_NAME", ""),
        to_emails=_split_recipients(os.getenv("EMAIL_TO", "")),
        request_timeout_seconds=float(os.getenv("EMAIL_REQUEST_TIMEOUT_SECONDS", "30")),
    )


@lru_cache(maxsize=1)
def get_email_settings() -> EmailSettings:
    """Retorna instância cacheada de EmailSettings."""
    return _load_from_env()
