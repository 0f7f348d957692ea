"""API — camada de borda e adapters externos.

Responsabilidades:
- Receber webhooks do Square e validar assinaturas
- Ler bookings/customers na API do Square
- Gravar eventos no calendário via CalDAV
- Construir documentos iCalendar

Subpastas:
- connectors/: adapters HTTP/SMTP por serviço externo
- payload_builders/: construção de payloads (iCalendar)
- routes/: endpoints HTTP (webhook, health)

NÃO PODE conter: regras de sincronização nem orquestração de use cases.
"""
