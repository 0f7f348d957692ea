"""Payload builder iCalendar para o calendário CalDAV (iCloud)."""

from api.payload_builders.apple_calendar.calendar import (
    build_ics,
    escape_text,
    format_ics_datetime,
    parse_event,
    parse_ics,
    unescape_text,
)

__all__ = [
    "build_ics",
    "escape_text",
    "format_ics_datetime",
    "parse_event",
    "parse_ics",
    "unescape_text",
]
