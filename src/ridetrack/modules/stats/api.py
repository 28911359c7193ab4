from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ridetrack.core.db import db_session
from ridetrack.modules.identity.service import get_user_or_404
from ridetrack.modules.rides.service import list_rides
from ridetrack.modules.stats.schemas import RideStatsOut
from ridetrack.modules.stats.service import compute_ride_stats

router = APIRouter(tags=["stats"])


@router.get("/stats/{identity}", response_model=RideStatsOut)
def ride_stats_endpoint(identity: str, session: Session = Depends(db_session)) -> RideStatsOut:
    user = get_user_or_404(session, identity=identity)
    stats = compute_ride_stats(list_rides(session, user_id=user.id))
    return RideStatsOut.model_validate(stats, from_attributes=True)
