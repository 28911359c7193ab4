from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from sqlalchemy.orm import Session

from ridetrack.core.logging import get_logger, log_event, monotonic_ms, set_user_context
from ridetrack.core.models import as_utc, utcnow
from ridetrack.modules.extraction.errors import (
    ExtractionRejected,
    NoRideDataError,
    PlatformNotRecognizedError,
    UnknownRecipientError,
)
from ridetrack.modules.extraction.mime import ParsedEmail, parse_raw_email
from ridetrack.modules.extraction.parsers.common import ParsedRide
from ridetrack.modules.extraction.registry import PLATFORM_PARSERS, PlatformParser, match_platform
from ridetrack.modules.identity.service import SqlUserDirectory, split_identities
from ridetrack.modules.rides.models import Platform
from ridetrack.modules.rides.service import SqlRideStore

logger = get_logger(__name__)


class UserDirectory(Protocol):
    def resolve(self, identity: str) -> uuid.UUID | None: ...


class RideStore(Protocol):
    def insert(self, user_id: uuid.UUID, record: RideRecord) -> uuid.UUID: ...


@dataclass(frozen=True)
class RideRecord:
    user_id: uuid.UUID
    platform: Platform
    value: Decimal
    origin: str | None
    destination: str | None
    occurred_at: datetime
    # False when the receipt carried no usable date and occurred_at is the ingestion time.
    occurred_at_extracted: bool
    raw_email: str


def extract_ride(
    raw_email: bytes | str, *, parsers: tuple[PlatformParser, ...] = PLATFORM_PARSERS
) -> ParsedRide:
    """Parse, detect and extract without touching any user or store."""
    return _extract(parse_raw_email(raw_email), parsers=parsers)


def _extract(email: ParsedEmail, *, parsers: tuple[PlatformParser, ...]) -> ParsedRide:
    entry = match_platform(email.sender, email.subject, parsers=parsers)
    if entry is None:
        raise PlatformNotRecognizedError()
    log_event(logger, "extraction.platform.detected", platform=entry.platform.value)

    parsed = entry.parse(email.text, email.html)
    if parsed is None:
        raise NoRideDataError()
    return parsed


def _resolve_recipient(users: UserDirectory, recipients: str | None) -> uuid.UUID | None:
    # A forwarded receipt can be addressed to several people; the first known one wins.
    for identity in split_identities(recipients):
        user_id = users.resolve(identity)
        if user_id is not None:
            return user_id
    return None


def process_email(
    raw_email: bytes | str,
    *,
    recipient: str | None,
    users: UserDirectory,
    now: datetime | None = None,
    parsers: tuple[PlatformParser, ...] = PLATFORM_PARSERS,
) -> RideRecord:
    start = time.monotonic()
    byte_size = len(raw_email.encode("utf-8") if isinstance(raw_email, str) else raw_email)
    log_event(logger, "extraction.start", byte_size=byte_size)

    try:
        email = parse_raw_email(raw_email)
        parsed = _extract(email, parsers=parsers)

        # Resolved only after extraction so "not a receipt" and "misrouted receipt"
        # stay distinguishable.
        user_id = _resolve_recipient(users, recipient or email.to)
        if user_id is None:
            raise UnknownRecipientError()
    except ExtractionRejected as e:
        log_event(
            logger,
            "extraction.rejected",
            reason=e.reason,
            detail=e.message,
            duration_ms=monotonic_ms(start),
        )
        raise

    set_user_context(str(user_id))
    record = RideRecord(
        user_id=user_id,
        platform=parsed.platform,
        value=parsed.value,
        origin=parsed.origin,
        destination=parsed.destination,
        occurred_at=as_utc(parsed.occurred_at or now or utcnow()),
        occurred_at_extracted=parsed.occurred_at is not None,
        raw_email=email.raw,
    )
    log_event(
        logger,
        "extraction.finish",
        platform=record.platform.value,
        value=str(record.value),
        has_origin=record.origin is not None,
        has_destination=record.destination is not None,
        occurred_at_extracted=record.occurred_at_extracted,
        duration_ms=monotonic_ms(start),
    )
    return record


def ingest_email(
    session: Session,
    raw_email: bytes | str,
    *,
    recipient: str | None,
    store: RideStore | None = None,
) -> tuple[uuid.UUID, RideRecord]:
    record = process_email(raw_email, recipient=recipient, users=SqlUserDirectory(session))
    ride_id = (store or SqlRideStore(session)).insert(record.user_id, record)
    return ride_id, record
