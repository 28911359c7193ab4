from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ridetrack.core.logging import get_logger, log_event
from ridetrack.core.models import as_utc, utcnow
from ridetrack.modules.identity.service import get_user_or_404
from ridetrack.modules.rides.models import Platform, Ride

if TYPE_CHECKING:
    from ridetrack.modules.extraction.service import RideRecord

logger = get_logger(__name__)


def list_rides(session: Session, *, user_id: uuid.UUID) -> list[Ride]:
    return list(
        session.scalars(
            select(Ride)
            .where(Ride.user_id == user_id)
            .order_by(Ride.occurred_at.desc(), Ride.created_at.desc())
        )
    )


def add_ride(
    session: Session,
    *,
    user_id: uuid.UUID,
    platform: Platform,
    value: Decimal,
    origin: str | None,
    destination: str | None,
    occurred_at: datetime,
    raw_email: str | None,
) -> Ride:
    if value < 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Value must be >= 0")

    ride = Ride(
        user_id=user_id,
        platform=platform,
        value=value,
        origin=_clean(origin),
        destination=_clean(destination),
        occurred_at=as_utc(occurred_at),
        raw_email=raw_email,
    )
    session.add(ride)
    try:
        session.commit()
    except Exception:
        session.rollback()
        raise
    session.refresh(ride)
    log_event(
        logger,
        "rides.insert.success",
        ride_id=str(ride.id),
        ride_user_id=str(user_id),
        platform=platform.value,
        source="email" if raw_email is not None else "manual",
    )
    return ride


def create_manual_ride(
    session: Session,
    *,
    user_email: str,
    platform: Platform,
    value: Decimal,
    origin: str | None = None,
    destination: str | None = None,
    occurred_at: datetime | None = None,
) -> Ride:
    user = get_user_or_404(session, identity=user_email)
    return add_ride(
        session,
        user_id=user.id,
        platform=platform,
        value=value,
        origin=origin,
        destination=destination,
        occurred_at=occurred_at or utcnow(),
        raw_email=None,
    )


def delete_ride(session: Session, *, ride_id: uuid.UUID) -> None:
    result = session.execute(delete(Ride).where(Ride.id == ride_id))
    if not result.rowcount:
        session.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ride not found")
    session.commit()
    log_event(logger, "rides.delete.success", ride_id=str(ride_id))


class SqlRideStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def insert(self, user_id: uuid.UUID, record: RideRecord) -> uuid.UUID:
        ride = add_ride(
            self._session,
            user_id=user_id,
            platform=record.platform,
            value=record.value,
            origin=record.origin,
            destination=record.destination,
            occurred_at=record.occurred_at,
            raw_email=record.raw_email,
        )
        return ride.id

    def query(self, user_id: uuid.UUID) -> list[Ride]:
        return list_rides(self._session, user_id=user_id)


def _clean(value: str | None) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None
