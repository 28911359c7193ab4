from __future__ import annotations

from fastapi import APIRouter

from ridetrack.modules.extraction.api import router as extraction_router
from ridetrack.modules.identity.api import router as identity_router
from ridetrack.modules.rides.api import router as rides_router
from ridetrack.modules.stats.api import router as stats_router

router = APIRouter()

router.include_router(identity_router, prefix="/api")
router.include_router(extraction_router, prefix="/api")
router.include_router(rides_router, prefix="/api")
router.include_router(stats_router, prefix="/api")


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}
