from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ridetrack.modules.extraction.parsers.common import ParsedRide
from ridetrack.modules.extraction.parsers.ninety_nine import parse_99_receipt
from ridetrack.modules.extraction.parsers.uber import parse_uber_receipt
from ridetrack.modules.rides.models import Platform

Detector = Callable[[str, str], bool]
ReceiptParser = Callable[[str, str], ParsedRide | None]


@dataclass(frozen=True)
class PlatformParser:
    platform: Platform
    detect: Detector
    parse: ReceiptParser


def name_in_sender_or_subject(name: str) -> Detector:
    needle = name.casefold()

    def _detect(sender: str, subject: str) -> bool:
        return needle in sender or needle in subject

    return _detect


# Priority order, first match wins. Uber must stay ahead of the looser "99" check.
PLATFORM_PARSERS: tuple[PlatformParser, ...] = (
    PlatformParser(Platform.UBER, name_in_sender_or_subject("uber"), parse_uber_receipt),
    PlatformParser(Platform.NINETY_NINE, name_in_sender_or_subject("99"), parse_99_receipt),
)


def match_platform(
    sender: str | None,
    subject: str | None,
    *,
    parsers: tuple[PlatformParser, ...] = PLATFORM_PARSERS,
) -> PlatformParser | None:
    sender_cf = (sender or "").casefold()
    subject_cf = (subject or "").casefold()
    for entry in parsers:
        if entry.detect(sender_cf, subject_cf):
            return entry
    return None


def detect_platform(
    sender: str | None,
    subject: str | None,
    *,
    parsers: tuple[PlatformParser, ...] = PLATFORM_PARSERS,
) -> Platform | None:
    entry = match_platform(sender, subject, parsers=parsers)
    return entry.platform if entry else None
