from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol
from zoneinfo import ZoneInfo

from ridetrack.core.config import settings
from ridetrack.core.models import as_utc, utcnow

_CENTS = Decimal("0.01")


class HasValueAndTime(Protocol):
    value: Decimal
    occurred_at: datetime


@dataclass(frozen=True)
class RideStats:
    total_spent: Decimal
    total_rides: int
    average_ride: Decimal
    month_spent: Decimal
    month_rides: int


def compute_ride_stats(
    rides: Iterable[HasValueAndTime], *, now: datetime | None = None
) -> RideStats:
    """Totals over all rides plus the slice that falls in the current calendar month.

    "Current month" is evaluated in the receipt timezone so a ride taken late on the
    last evening of a month in Brazil is not counted in the next one.
    """
    tz = ZoneInfo(settings.receipt_timezone)
    local_now = as_utc(now or utcnow()).astimezone(tz)

    total = Decimal("0")
    count = 0
    month_total = Decimal("0")
    month_count = 0
    for ride in rides:
        value = Decimal(ride.value)
        total += value
        count += 1
        local = as_utc(ride.occurred_at).astimezone(tz)
        if (local.year, local.month) == (local_now.year, local_now.month):
            month_total += value
            month_count += 1

    average = (total / count).quantize(_CENTS) if count else Decimal("0")
    return RideStats(
        total_spent=total.quantize(_CENTS),
        total_rides=count,
        average_ride=average,
        month_spent=month_total.quantize(_CENTS),
        month_rides=month_count,
    )
