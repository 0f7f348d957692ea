#!/usr/bin/env python3
"""Exporta um booking do Square como arquivo .ics local.

Uso:
    SQUARE_ACCESS_TOKEN=... python scripts/export_booking_ics.py <BOOKING_ID> --output-dir out/

Grava truck_event_<summary>_<booking_id>.ics sem tocar no CalDAV.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import re
import sys
from pathlib import Path

from api.connectors.square import create_square_booking_client
from api.payload_builders.apple_calendar import build_ics
from app.bootstrap import initialize_app
from app.bootstrap.dependencies import create_event_projector
from config.logging import log_fallback
from config.settings import get_square_settings, get_sync_settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS_RE = re.compile(r"[^a-z0-9\-_]+", re.IGNORECASE)
MAX_SAFE_NAME_LENGTH = 80


def safe_name(value: str) -> str:
    """Troca sequências fora de [A-Za-z0-9_-] por '_' e corta em 80 caracteres."""
    return _UNSAFE_CHARS_RE.sub("_", value)[:MAX_SAFE_NAME_LENGTH]


def output_filename(summary: str, booking_id: str) -> str:
    return f"truck_event_{safe_name(summary)}_{booking_id}.ics"


async def export_booking(booking_id: str, output_dir: Path) -> Path:
    """Busca booking (+ customer best-effort), projeta e grava o .ics."""
    client = create_square_booking_client()
    projector = create_event_projector()

    booking = await client.get_booking(booking_id)
    customer = None
    if booking.customer_id:
        try:
            customer = await client.get_customer(booking.customer_id)
        except Exception as exc:
            log_fallback(
                logger,
                "customer_lookup",
                reason=type(exc).__name__,
                booking_id=booking_id,
            )

    record = projector.project(booking, customer)
    document = build_ics(record, product_id=get_sync_settings().product_id)

    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / output_filename(record.summary, booking.id)
    path.write_text(document, encoding="utf-8", newline="")
    return path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("booking_id", help="ID do booking no Square.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Diretório de saída (padrão: diretório atual).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if not get_square_settings().access_token:
        print("SQUARE_ACCESS_TOKEN não configurado.", file=sys.stderr)
        print("Uso: export_booking_ics.py <BOOKING_ID> [--output-dir DIR]", file=sys.stderr)
        return 1

    initialize_app()
    path = asyncio.run(export_booking(args.booking_id, args.output_dir))
    print(f"Saved {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
