from __future__ import annotations

from ridetrack.modules.extraction.parsers.common import (
    ParsedRide,
    find_amount_in_bodies,
    find_labelled,
    parse_numeric_date,
)
from ridetrack.modules.rides.models import Platform

ORIGIN_LABELS = ("Origem", "Partida")
DESTINATION_LABELS = ("Destino", "Chegada")


def parse_99_receipt(text: str, html: str) -> ParsedRide | None:
    amount = find_amount_in_bodies(text, html)
    if amount is None:
        return None

    return ParsedRide(
        platform=Platform.NINETY_NINE,
        value=amount,
        origin=find_labelled(text, ORIGIN_LABELS),
        destination=find_labelled(text, DESTINATION_LABELS),
        occurred_at=parse_numeric_date(text),
    )
