"""Notificação por email (SMTP) dos eventos de booking.

smtplib é bloqueante: o envio roda em thread via asyncio.to_thread.
O canal é opcional; sem configuração vira no-op (NullNotifier).
"""

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import TYPE_CHECKING

from app.observability import get_correlation_id

if TYPE_CHECKING:
    from config.settings import EmailSettings

logger = logging.getLogger(__name__)

_COMPONENT = "email_notifier"


class NullNotifier:
    """Notifier desativado: descarta as mensagens."""

    @property
    def enabled(self) -> bool:
        return False

    async def send(
        self,
        *,
        subject: str,
        body: str,
        ics_document: str | None = None,
        ics_filename: str = "event.ics",
    ) -> None:
        return None


class SmtpNotifier:
    """Envia notificações por SMTP com o .ics do evento em anexo.

    Args:
        settings: EmailSettings com host, remetente e destinatários.
        smtp_factory: Construtor do cliente SMTP (substituível em testes).
    """

    def __init__(
        self,
        settings: EmailSettings,
        *,
        smtp_factory: type[smtplib.SMTP] = smtplib.SMTP,
    ) -> None:
        self._settings = settings
        self._smtp_factory = smtp_factory

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    def build_message(
        self,
        *,
        subject: str,
        body: str,
        ics_document: str | None = None,
        ics_filename: str = "event.ics",
    ) -> EmailMessage:
        settings = self._settings
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = (
            formataddr((settings.from_name, settings.from_email))
            if settings.from_name
            else settings.from_email
        )
        message["To"] = ", ".join(settings.to_emails)
        message.set_content(body)
        if ics_document:
            message.add_attachment(
                ics_document.encode("utf-8"),
                maintype="text",
                subtype="calendar",
                filename=ics_filename,
                params={"method": "PUBLISH"},
            )
        return message

    async def send(
        self,
        *,
        subject: str,
        body: str,
        ics_document: str | None = None,
        ics_filename: str = "event.ics",
    ) -> None:
        """Envia a mensagem; no-op quando o canal está desativado.

        Raises:
            smtplib.SMTPException | OSError: Falha de envio (tratada pelo chamador).
        """
        if not self.enabled:
            return
        message = self.build_message(
            subject=subject,
            body=body,
            ics_document=ics_document,
            ics_filename=ics_filename,
        )
        await asyncio.to_thread(self._smtp_send, message)
        logger.info(
            "email_notification_sent",
            extra={
                "component": _COMPONENT,
                "action": "send",
                "result": "ok",
                "recipients": len(self._settings.to_emails),
                "correlation_id": get_correlation_id(),
            },
        )

    def _smtp_send(self, message: EmailMessage) -> None:
        """Envio bloqueante; executado via asyncio.to_thread."""
        settings = self._settings
        with self._smtp_factory(
            settings.smtp_host,
            settings.smtp_port,
            timeout=settings.request_timeout_seconds,
        ) as server:
            if settings.smtp_use_tls:
                server.starttls()
            if settings.smtp_username:
                server.login(settings.smtp_username, settings.smtp_password)
            server.send_message(message)


def create_notifier(settings: EmailSettings | None = None) -> SmtpNotifier | NullNotifier:
    """Retorna SmtpNotifier quando o canal está configurado; senão NullNotifier."""
    from config.settings import get_email_settings

    email = settings or get_email_settings()
    if not email.enabled:
        logger.info(
            "email_notifier_disabled",
            extra={"component": _COMPONENT, "action": "create", "result": "disabled"},
        )
        return NullNotifier()
    return SmtpNotifier(email)
