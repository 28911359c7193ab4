from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from ridetrack.core.config import settings
from ridetrack.core.db import db_session
from ridetrack.modules.extraction.errors import ExtractionRejected, MalformedEmailError
from ridetrack.modules.extraction.schemas import IngestedRideOut, WebhookResultOut
from ridetrack.modules.extraction.service import ingest_email

router = APIRouter(tags=["extraction"])


def _too_large() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Email too large"
    )


async def _read_capped_body(request: Request, limit: int) -> bytes:
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise _too_large()

    # Chunked uploads carry no length, so the cap is also enforced while streaming.
    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise _too_large()
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/webhook/email", response_model=WebhookResultOut)
async def email_webhook_endpoint(
    request: Request,
    x_to_email: str | None = Header(default=None),
    to: str | None = Query(default=None),
    session: Session = Depends(db_session),
) -> WebhookResultOut:
    body = await _read_capped_body(request, settings.max_email_bytes)

    try:
        ride_id, record = await run_in_threadpool(
            ingest_email, session, body, recipient=x_to_email or to
        )
    except ExtractionRejected as e:
        code = (
            status.HTTP_422_UNPROCESSABLE_ENTITY
            if isinstance(e, MalformedEmailError)
            else status.HTTP_400_BAD_REQUEST
        )
        raise HTTPException(
            status_code=code, detail={"reason": e.reason, "message": e.message}
        ) from e

    return WebhookResultOut(
        ride=IngestedRideOut(
            id=ride_id,
            user_id=record.user_id,
            platform=record.platform,
            value=record.value,
            origin=record.origin,
            destination=record.destination,
            occurred_at=record.occurred_at,
            occurred_at_extracted=record.occurred_at_extracted,
        )
    )
