from __future__ import annotations

import re

from ridetrack.modules.extraction.parsers.common import (
    ParsedRide,
    find_amount_in_bodies,
    parse_written_date,
)
from ridetrack.modules.rides.models import Platform

# "De: <pickup> Para: <dropoff>", on one line or with Para: opening the next one.
_ROUTE_RE = re.compile(
    r"\b(?:De|From):[ \t]*([^\r\n]+?)\s*\b(?:Para|To):[ \t]*([^\r\n]+)",
    re.I,
)


def parse_uber_receipt(text: str, html: str) -> ParsedRide | None:
    amount = find_amount_in_bodies(text, html)
    if amount is None:
        return None

    origin, destination = _parse_route(text)
    return ParsedRide(
        platform=Platform.UBER,
        value=amount,
        origin=origin,
        destination=destination,
        occurred_at=parse_written_date(text),
    )


def _parse_route(text: str) -> tuple[str | None, str | None]:
    m = _ROUTE_RE.search(text or "")
    if not m:
        return None, None
    origin = m.group(1).strip() or None
    destination = m.group(2).strip() or None
    return origin, destination
