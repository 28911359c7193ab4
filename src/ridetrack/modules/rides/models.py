from __future__ import annotations

import enum
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Numeric, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ridetrack.core.models import Base, CreatedAt, UUIDPrimaryKey


class Platform(str, enum.Enum):
    UBER = "uber"
    NINETY_NINE = "99"


class Ride(UUIDPrimaryKey, CreatedAt, Base):
    __tablename__ = "rides_ride"
    __table_args__ = (CheckConstraint("value >= 0", name="ck_ride_value_non_negative"),)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("identity_user.id"), index=True
    )
    platform: Mapped[Platform] = mapped_column(
        Enum(Platform, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        index=True,
    )
    value: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    origin: Mapped[str | None] = mapped_column(Text, nullable=True)
    destination: Mapped[str | None] = mapped_column(Text, nullable=True)
    occurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    # Null for manual entries.
    raw_email: Mapped[str | None] = mapped_column(Text, nullable=True)

    user = relationship("User")
