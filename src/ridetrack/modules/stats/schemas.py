from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class RideStatsOut(BaseModel):
    total_spent: Decimal
    total_rides: int
    average_ride: Decimal
    month_spent: Decimal
    month_rides: int
