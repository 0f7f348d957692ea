"""Connector Email — notificações SMTP dos eventos de booking."""

from api.connectors.email.smtp_notifier import NullNotifier, SmtpNotifier, create_notifier

__all__ = ["NullNotifier", "SmtpNotifier", "create_notifier"]
