"""PROPFIND de discovery CalDAV (RFC 4791 / RFC 6764).

Fluxo:
1. current-user-principal na raiz do servidor
2. calendar-home-set no principal
3. coleções (Depth 1) do home com displayname e resourcetype

Todo href é resolvido contra a URL que o devolveu: o iCloud responde
com hrefs relativos e também com URLs absolutas de outro host.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from urllib.parse import urljoin

NS_DAV = "DAV:"
NS_CALDAV = "urn:ietf:params:xml:ns:caldav"

PRINCIPAL_BODY = """<?xml version="1.0" encoding="utf-8"?>
<d:propfind xmlns:d="DAV:">
  <d:prop>
    <d:current-user-principal />
  </d:prop>
</d:propfind>
"""

HOME_SET_BODY = """<?xml version="1.0" encoding="utf-8"?>
<d:propfind xmlns:d="DAV:" xmlns:c="urn:ietf:params:xml:ns:caldav">
  <d:prop>
    <c:calendar-home-set />
  </d:prop>
</d:propfind>
"""

CALENDARS_BODY = """<?xml version="1.0" encoding="utf-8"?>
<d:propfind xmlns:d="DAV:" xmlns:c="urn:ietf:params:xml:ns:caldav">
  <d:prop>
    <d:displayname />
    <d:resourcetype />
  </d:prop>
</d:propfind>
"""


class DiscoveryParseError(ValueError):
    """Resposta multistatus inválida."""


@dataclass(frozen=True, slots=True)
class DiscoveredCalendar:
    """Coleção de calendário com URL absoluta (sempre com barra final)."""

    url: str
    display_name: str


def _q(namespace: str, name: str) -> str:
    return f"{{{namespace}}}{name}"


def _parse(payload: bytes | str) -> ET.Element:
    try:
        return ET.fromstring(payload)
    except ET.ParseError as exc:
        raise DiscoveryParseError("invalid_multistatus_xml") from exc


def absolute_url(base_url: str, href: str) -> str:
    """Resolve um href (relativo ou absoluto) contra a URL de origem."""
    return urljoin(base_url, href.strip())


def collection_url(base_url: str, href: str) -> str:
    url = absolute_url(base_url, href)
    return url if url.endswith("/") else f"{url}/"


def _first_href(root: ET.Element, prop_name: str, namespace: str) -> str | None:
    for prop in root.iter(_q(namespace, prop_name)):
        href = prop.find(_q(NS_DAV, "href"))
        if href is not None and href.text and href.text.strip():
            return href.text.strip()
    return None


def extract_principal_href(payload: bytes | str) -> str | None:
    return _first_href(_parse(payload), "current-user-principal", NS_DAV)


def extract_calendar_home_href(payload: bytes | str) -> str | None:
    return _first_href(_parse(payload), "calendar-home-set", NS_CALDAV)


def _propstat_ok(propstat: ET.Element) -> bool:
    status = propstat.findtext(_q(NS_DAV, "status")) or ""
    return " 200 " in f" {status} "


def extract_calendars(payload: bytes | str, base_url: str) -> list[DiscoveredCalendar]:
    """Lista as coleções do tipo calendar do multistatus Depth 1.

    Args:
        payload: Corpo 207 do PROPFIND no calendar-home-set.
        base_url: URL que recebeu o PROPFIND (base dos hrefs relativos).
    """
    calendars: list[DiscoveredCalendar] = []
    for response in _parse(payload).iter(_q(NS_DAV, "response")):
        href = response.findtext(_q(NS_DAV, "href"))
        if not href or not href.strip():
            continue
        is_calendar = False
        display_name = ""
        for propstat in response.iter(_q(NS_DAV, "propstat")):
            if not _propstat_ok(propstat):
                continue
            prop = propstat.find(_q(NS_DAV, "prop"))
            if prop is None:
                continue
            resourcetype = prop.find(_q(NS_DAV, "resourcetype"))
            if resourcetype is not None and resourcetype.find(_q(NS_CALDAV, "calendar")) is not None:
                is_calendar = True
            name = prop.findtext(_q(NS_DAV, "displayname"))
            if name:
                display_name = name
        if is_calendar:
            calendars.append(
                DiscoveredCalendar(url=collection_url(base_url, href), display_name=display_name)
            )
    return calendars


def select_calendar(
    calendars: list[DiscoveredCalendar],
    target_name: str,
) -> DiscoveredCalendar | None:
    """Escolhe o calendário pelo display name (trim); senão, o primeiro."""
    wanted = (target_name or "").strip()
    for calendar in calendars:
        if calendar.display_name.strip() == wanted:
            return calendar
    return calendars[0] if calendars else None
