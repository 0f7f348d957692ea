"""Connectors — adapters de borda para serviços externos.

Estrutura:
- square/: Square Bookings/Customers API e webhooks
- apple_calendar/: CalDAV (iCloud Calendar)
- email/: notificações SMTP

Cada serviço tem seu próprio connector, garantindo isolamento de falhas.
"""

__all__: list[str] = []
