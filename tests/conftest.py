from __future__ import annotations

import os
from email.message import EmailMessage

import pytest

# Set env before any ridetrack imports (settings/engine are created at import time).
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///./.ridetrack_test.db")
os.environ.setdefault("RECEIPT_TIMEZONE", "America/Sao_Paulo")


@pytest.fixture(autouse=True)
def _reset_db() -> None:
    import ridetrack.models  # noqa: F401
    from ridetrack.core.db import engine
    from ridetrack.core.models import Base

    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)

    yield


def build_email(
    *,
    sender: str,
    subject: str,
    text: str | None = None,
    html: str | None = None,
    to: str = "someone@example.com",
) -> bytes:
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject
    msg["Date"] = "Mon, 16 Mar 2026 10:00:00 -0300"
    if text is not None:
        msg.set_content(text)
        if html is not None:
            msg.add_alternative(html, subtype="html")
    elif html is not None:
        msg.set_content(html, subtype="html")
    return msg.as_bytes()


@pytest.fixture
def make_email():
    return build_email
