from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ridetrack.core.models import Base, CreatedAt, UUIDPrimaryKey


class User(UUIDPrimaryKey, CreatedAt, Base):
    __tablename__ = "identity_user"

    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    # Receipts forwarded to this address are attributed to the user.
    ingestion_email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
