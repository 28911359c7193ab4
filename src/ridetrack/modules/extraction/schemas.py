from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from ridetrack.modules.rides.models import Platform


class IngestedRideOut(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    platform: Platform
    value: Decimal
    origin: str | None
    destination: str | None
    occurred_at: datetime
    occurred_at_extracted: bool


class WebhookResultOut(BaseModel):
    success: bool = True
    ride: IngestedRideOut
