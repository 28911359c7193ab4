from __future__ import annotations

import secrets
import uuid
from email.utils import getaddresses, parseaddr

from fastapi import HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ridetrack.core.config import settings
from ridetrack.core.logging import get_logger, log_event
from ridetrack.modules.identity.models import User

logger = get_logger(__name__)


def normalize_identity(identity: str | None) -> str:
    """Reduce ``"Name <addr@host>"`` style values to a bare lower-case address."""
    _, addr = parseaddr(str(identity or ""))
    return (addr or str(identity or "")).strip().lower()


def split_identities(value: str | None) -> list[str]:
    """Every address in a header-style list, normalized, in order."""
    addrs = [normalize_identity(addr) for _, addr in getaddresses([str(value or "")])]
    return [a for a in dict.fromkeys(addrs) if a]


def generate_ingestion_email() -> str:
    return f"{settings.ingestion_prefix}-{secrets.token_hex(6)}@{settings.ingestion_domain}"


def get_user_by_email(session: Session, *, email: str) -> User | None:
    return session.scalar(select(User).where(User.email == normalize_identity(email)))


def find_user(session: Session, *, identity: str) -> User | None:
    """Look a user up by either the public email or the ingestion address."""
    ident = normalize_identity(identity)
    if not ident:
        return None
    return session.scalar(
        select(User).where(or_(User.email == ident, User.ingestion_email == ident))
    )


def get_user_or_404(session: Session, *, identity: str) -> User:
    user = find_user(session, identity=identity)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def register_user(session: Session, *, email: str) -> User:
    email = normalize_identity(email)
    if get_user_by_email(session, email=email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    user = User(email=email, ingestion_email=generate_ingestion_email())
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        # A concurrent registration for the same address won the race.
        session.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Email already registered"
        ) from e
    session.refresh(user)
    log_event(
        logger,
        "identity.user.registered",
        user_id=str(user.id),
        ingestion_email=user.ingestion_email,
    )
    return user


class SqlUserDirectory:
    """Resolves ingestion/public addresses to user ids against the database."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def resolve(self, identity: str) -> uuid.UUID | None:
        user = find_user(self._session, identity=identity)
        return user.id if user else None
