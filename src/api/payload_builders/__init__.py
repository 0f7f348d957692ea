"""Payload builders — construção de payloads para APIs externas.

Estrutura:
- apple_calendar/: documento iCalendar gravado via CalDAV

Funções puras, sem IO.
"""

__all__: list[str] = []
