"""Connector Apple Calendar — store CalDAV/iCloud dos eventos de booking."""

from api.connectors.apple_calendar.client import (
    CalDavCalendarClient,
    create_caldav_client,
    object_filename,
)
from api.connectors.apple_calendar.discovery import DiscoveredCalendar
from api.connectors.apple_calendar.errors import (
    CalDavAuthError,
    CalDavError,
    CalDavRequestError,
    CalendarNotFoundError,
)

__all__ = [
    "CalDavAuthError",
    "CalDavCalendarClient",
    "CalDavError",
    "CalDavRequestError",
    "CalendarNotFoundError",
    "DiscoveredCalendar",
    "create_caldav_client",
    "object_filename",
]
