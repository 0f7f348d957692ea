"""Payload builder de eventos iCalendar (RFC 5545) para CalDAV.

Constrói o documento de um único VEVENT gravado no iCloud Calendar e
oferece um decoder mínimo (usado no export e nos testes).

Formato (serialização do icalendar):
- Datas em UTC: YYYYMMDDTHHMMSSZ
- Texto escapado: \\ ; , e quebras de linha
- Linhas terminadas em CRLF, incluindo a última; dobra em 75 octetos
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

from icalendar import Calendar, Event, vDDDTypes, vText
from icalendar.parser import Contentlines

from app.domain.booking import CalendarEventRecord
from config.settings.sync import DEFAULT_PRODUCT_ID

TEXT_PROPERTIES = ("UID", "SUMMARY", "LOCATION", "DESCRIPTION")

_LINE_BREAK_RE = re.compile(r"\r\n|\r")
_ESCAPED_CHAR_RE = re.compile(r"\\(.)", re.DOTALL)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_ics_datetime(value: datetime) -> str:
    """Formata datetime em UTC no formato DATE-TIME do iCalendar."""
    return vDDDTypes(_as_utc(value)).to_ical().decode("utf-8")


def parse_ics_datetime(value: str) -> datetime:
    """Converte um DATE-TIME do iCalendar em datetime UTC."""
    return _as_utc(vDDDTypes.from_ical(value.strip()))


def _normalize_line_breaks(value: str | None) -> str:
    return _LINE_BREAK_RE.sub("\n", str(value or ""))


def escape_text(value: str | None) -> str:
    """Escapa um valor TEXT com vText.

    CRLF e CR isolado viram LF antes do escape: o texto decodificado
    sempre usa "\\n" como quebra de linha. O icalendar também lê a
    sequência literal barra invertida + "N" como quebra de linha.
    """
    return vText(_normalize_line_breaks(value)).to_ical().decode("utf-8")


def unescape_text(value: str) -> str:
    """Desfaz o escape TEXT numa única passada da esquerda para a direita.

    vText.from_ical substitui sequência por sequência e transforma uma
    barra escapada seguida de "n" em quebra de linha.
    """

    def _replace(match: re.Match[str]) -> str:
        char = match.group(1)
        return "\n" if char in ("n", "N") else char

    return _ESCAPED_CHAR_RE.sub(_replace, value)


def build_ics(
    record: CalendarEventRecord,
    *,
    product_id: str = DEFAULT_PRODUCT_ID,
    now: datetime | None = None,
) -> str:
    """Serializa o evento em um documento VCALENDAR com um único VEVENT.

    Args:
        record: Evento calculado pelo projetor.
        product_id: Valor do PRODID.
        now: Instante do DTSTAMP (padrão: agora, UTC).

    Returns:
        Documento iCalendar com linhas CRLF e CRLF final.
    """
    calendar = Calendar()
    calendar.add("version", "2.0")
    calendar.add("prodid", product_id)
    calendar.add("calscale", "GREGORIAN")
    calendar.add("method", "PUBLISH")

    event = Event()
    event.add("uid", record.uid)
    event.add("dtstamp", _as_utc(now or datetime.now(UTC)))
    event.add("dtstart", _as_utc(record.start))
    event.add("dtend", _as_utc(record.end))
    event.add("summary", _normalize_line_breaks(record.summary))
    event.add("location", _normalize_line_breaks(record.location))
    event.add("description", _normalize_line_breaks(record.description))
    calendar.add_component(event)

    return calendar.to_ical().decode("utf-8")


def parse_ics(document: str) -> dict[str, str]:
    """Decoder mínimo: propriedades do primeiro VEVENT, texto já sem escape.

    O desdobramento de linhas fica com Contentlines; parâmetros de
    propriedade (ex: DTSTART;TZID=...) são descartados.

    Raises:
        ValueError: Linha de conteúdo malformada.
    """
    properties: dict[str, str] = {}
    in_event = False
    for line in Contentlines.from_ical(document):
        if not line:
            continue
        name, _params, value = line.parts()
        name = name.upper()
        if name == "BEGIN" and value.upper() == "VEVENT":
            in_event = True
            continue
        if name == "END" and value.upper() == "VEVENT":
            break
        if not in_event:
            continue
        properties[name] = unescape_text(value) if name in TEXT_PROPERTIES else value
    return properties


def parse_event(document: str) -> CalendarEventRecord:
    """Reconstrói o CalendarEventRecord a partir de um documento gerado por build_ics.

    Raises:
        ValueError: Se faltar alguma propriedade obrigatória.
    """
    properties = parse_ics(document)
    missing = [
        name
        for name in ("UID", "DTSTART", "DTEND")
        if name not in properties
    ]
    if missing:
        raise ValueError(f"VEVENT sem propriedades obrigatórias: {', '.join(missing)}")
    return CalendarEventRecord(
        uid=properties["UID"],
        summary=properties.get("SUMMARY", ""),
        location=properties.get("LOCATION", ""),
        description=properties.get("DESCRIPTION", ""),
        start=parse_ics_datetime(properties["DTSTART"]),
        end=parse_ics_datetime(properties["DTEND"]),
    )
