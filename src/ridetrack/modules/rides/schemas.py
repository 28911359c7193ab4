from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field, field_validator

from ridetrack.core.models import as_utc
from ridetrack.modules.rides.models import Platform


class RideCreateIn(BaseModel):
    user_email: EmailStr
    platform: Platform
    value: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    origin: str | None = None
    destination: str | None = None
    occurred_at: datetime | None = None


class RideOut(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    platform: Platform
    value: Decimal
    origin: str | None
    destination: str | None
    occurred_at: datetime
    created_at: datetime

    @field_validator("occurred_at", "created_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)
