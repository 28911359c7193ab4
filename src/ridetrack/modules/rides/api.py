from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ridetrack.core.db import db_session
from ridetrack.modules.identity.service import get_user_or_404
from ridetrack.modules.rides.schemas import RideCreateIn, RideOut
from ridetrack.modules.rides.service import create_manual_ride, delete_ride, list_rides

router = APIRouter(tags=["rides"])


@router.get("/rides/{identity}", response_model=list[RideOut])
def list_rides_endpoint(identity: str, session: Session = Depends(db_session)) -> list[RideOut]:
    user = get_user_or_404(session, identity=identity)
    rides = list_rides(session, user_id=user.id)
    return [RideOut.model_validate(r, from_attributes=True) for r in rides]


@router.post("/rides", response_model=RideOut, status_code=status.HTTP_201_CREATED)
def create_ride_endpoint(payload: RideCreateIn, session: Session = Depends(db_session)) -> RideOut:
    ride = create_manual_ride(session, **payload.model_dump())
    return RideOut.model_validate(ride, from_attributes=True)


@router.delete("/rides/{ride_id}")
def delete_ride_endpoint(ride_id: uuid.UUID, session: Session = Depends(db_session)) -> Response:
    delete_ride(session, ride_id=ride_id)
    return Response(status_code=204)
