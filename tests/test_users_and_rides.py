from __future__ import annotations

import re
import uuid
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from ridetrack.core.db import SessionLocal
from ridetrack.core.models import as_utc
from ridetrack.main import create_app
from ridetrack.modules.extraction.service import RideRecord
from ridetrack.modules.identity.service import SqlUserDirectory, register_user
from ridetrack.modules.rides.models import Platform
from ridetrack.modules.rides.service import SqlRideStore, create_manual_ride


def _record(user_id: uuid.UUID, *, occurred_at: datetime, value: str = "10.00") -> RideRecord:
    return RideRecord(
        user_id=user_id,
        platform=Platform.UBER,
        value=Decimal(value),
        origin=None,
        destination=None,
        occurred_at=occurred_at,
        occurred_at_extracted=True,
        raw_email="From: noreply@uber.com\n\nR$ 10,00",
    )


def test_register_user_generates_ingestion_address():
    with SessionLocal() as session:
        user = register_user(session, email="Rider@Example.com")

    assert user.email == "rider@example.com"
    assert re.fullmatch(r"corridas-[0-9a-f]{12}@ridetrack\.app", user.ingestion_email)


def test_register_user_rejects_duplicate_email():
    with SessionLocal() as session:
        register_user(session, email="rider@example.com")
        with pytest.raises(HTTPException) as exc:
            register_user(session, email="rider@example.com")
    assert exc.value.status_code == 409


def test_user_directory_resolves_public_and_ingestion_address():
    with SessionLocal() as session:
        user = register_user(session, email="rider@example.com")
        directory = SqlUserDirectory(session)
        assert directory.resolve("rider@example.com") == user.id
        assert directory.resolve(user.ingestion_email) == user.id
        assert directory.resolve("nobody@example.com") is None


def test_store_queries_newest_first():
    with SessionLocal() as session:
        user = register_user(session, email="rider@example.com")
        store = SqlRideStore(session)
        older = store.insert(user.id, _record(user.id, occurred_at=datetime(2026, 1, 5, tzinfo=UTC)))
        newer = store.insert(user.id, _record(user.id, occurred_at=datetime(2026, 3, 1, tzinfo=UTC)))
        middle = store.insert(user.id, _record(user.id, occurred_at=datetime(2026, 2, 1, tzinfo=UTC)))

        rides = store.query(user.id)
        assert [r.id for r in rides] == [newer, middle, older]
        assert as_utc(rides[0].occurred_at) == datetime(2026, 3, 1, tzinfo=UTC)


def test_store_insert_for_unknown_user_violates_foreign_key():
    missing = uuid.uuid4()
    with SessionLocal() as session:
        with pytest.raises(IntegrityError):
            SqlRideStore(session).insert(
                missing, _record(missing, occurred_at=datetime(2026, 1, 5, tzinfo=UTC))
            )


def test_manual_ride_defaults_occurred_at_and_rejects_unknown_user():
    with SessionLocal() as session:
        register_user(session, email="rider@example.com")
        ride = create_manual_ride(
            session,
            user_email="rider@example.com",
            platform=Platform.NINETY_NINE,
            value=Decimal("18.00"),
            origin="  Centro ",
            destination="",
        )
        assert ride.origin == "Centro"
        assert ride.destination is None
        assert ride.raw_email is None
        assert ride.occurred_at is not None

        with pytest.raises(HTTPException) as exc:
            create_manual_ride(
                session,
                user_email="nobody@example.com",
                platform=Platform.UBER,
                value=Decimal("1.00"),
            )
        assert exc.value.status_code == 404


def test_rides_api_roundtrip():
    with TestClient(create_app()) as client:
        created = client.post("/api/users", json={"email": "rider@example.com"})
        assert created.status_code == 201
        ingestion = created.json()["ingestion_email"]
        assert ingestion in created.json()["message"]

        assert client.post("/api/users", json={"email": "rider@example.com"}).status_code == 409
        assert client.get(f"/api/users/{ingestion}").json()["email"] == "rider@example.com"
        assert client.get("/api/users/nobody@example.com").status_code == 404

        first = client.post(
            "/api/rides",
            json={
                "user_email": "rider@example.com",
                "platform": "uber",
                "value": "30.00",
                "occurred_at": "2026-01-10T12:00:00Z",
            },
        )
        assert first.status_code == 201
        second = client.post(
            "/api/rides",
            json={
                "user_email": "rider@example.com",
                "platform": "99",
                "value": "12.50",
                "origin": "Centro",
                "occurred_at": "2026-02-10T12:00:00Z",
            },
        )
        assert second.status_code == 201

        negative = client.post(
            "/api/rides",
            json={"user_email": "rider@example.com", "platform": "uber", "value": "-1"},
        )
        assert negative.status_code == 422
        bad_platform = client.post(
            "/api/rides",
            json={"user_email": "rider@example.com", "platform": "lyft", "value": "1"},
        )
        assert bad_platform.status_code == 422

        listed = client.get(f"/api/rides/{ingestion}").json()
        assert [r["id"] for r in listed] == [second.json()["id"], first.json()["id"]]

        assert client.delete(f"/api/rides/{first.json()['id']}").status_code == 204
        assert client.delete(f"/api/rides/{first.json()['id']}").status_code == 404
        assert len(client.get("/api/rides/rider@example.com").json()) == 1
        assert client.get("/api/rides/nobody@example.com").status_code == 404
