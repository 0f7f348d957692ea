"""Testes dos parsers de multistatus do discovery CalDAV."""

from __future__ import annotations

import pytest

from api.connectors.apple_calendar.discovery import (
    DiscoveredCalendar,
    DiscoveryParseError,
    collection_url,
    extract_calendar_home_href,
    extract_calendars,
    extract_principal_href,
    select_calendar,
)

HOME = "https://p07-caldav.test/123/calendars/"

CALENDARS = b"""<?xml version="1.0"?>
<d:multistatus xmlns:d="DAV:" xmlns:c="urn:ietf:params:xml:ns:caldav">
  <d:response>
    <d:href>/123/calendars/</d:href>
    <d:propstat>
      <d:prop><d:resourcetype><d:collection/></d:resourcetype></d:prop>
      <d:status>HTTP/1.1 200 OK</d:status>
    </d:propstat>
  </d:response>
  <d:response>
    <d:href>/123/calendars/work</d:href>
    <d:propstat>
      <d:prop>
        <d:displayname> Truck Events </d:displayname>
        <d:resourcetype><d:collection/><c:calendar/></d:resourcetype>
      </d:prop>
      <d:status>HTTP/1.1 200 OK</d:status>
    </d:propstat>
  </d:response>
  <d:response>
    <d:href>https://other.test/123/calendars/hidden/</d:href>
    <d:propstat>
      <d:prop><d:resourcetype><d:collection/><c:calendar/></d:resourcetype></d:prop>
      <d:status>HTTP/1.1 404 Not Found</d:status>
    </d:propstat>
  </d:response>
</d:multistatus>
"""


def test_principal_href() -> None:
    payload = (
        b'<d:multistatus xmlns:d="DAV:"><d:response><d:propstat><d:prop>'
        b"<d:current-user-principal><d:href> /123/principal/ </d:href>"
        b"</d:current-user-principal></d:prop></d:propstat></d:response></d:multistatus>"
    )

    assert extract_principal_href(payload) == "/123/principal/"


def test_home_href_missing() -> None:
    assert extract_calendar_home_href(b'<d:multistatus xmlns:d="DAV:"/>') is None


def test_invalid_xml() -> None:
    with pytest.raises(DiscoveryParseError):
        extract_principal_href(b"<not-xml")


def test_only_calendar_collections_with_ok_status() -> None:
    calendars = extract_calendars(CALENDARS, HOME)

    assert calendars == [
        DiscoveredCalendar(
            url="https://p07-caldav.test/123/calendars/work/",
            display_name=" Truck Events ",
        )
    ]


def test_collection_url_keeps_foreign_host() -> None:
    assert collection_url(HOME, "https://other.test/x") == "https://other.test/x/"


def test_select_calendar_by_trimmed_name_or_first() -> None:
    first = DiscoveredCalendar(url="https://a.test/1/", display_name="Home")
    second = DiscoveredCalendar(url="https://a.test/2/", display_name="Truck Events ")

    assert select_calendar([first, second], " Truck Events") is second
    assert select_calendar([first, second], "Missing") is first
    assert select_calendar([], "Missing") is None
