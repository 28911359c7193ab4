from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ridetrack.core.db import db_session
from ridetrack.modules.identity.schemas import UserCreate, UserOut, UserRegisteredOut
from ridetrack.modules.identity.service import get_user_or_404, register_user

router = APIRouter(tags=["identity"])


@router.post("/users", response_model=UserRegisteredOut, status_code=status.HTTP_201_CREATED)
def register_user_endpoint(
    payload: UserCreate, session: Session = Depends(db_session)
) -> UserRegisteredOut:
    user = register_user(session, email=str(payload.email))
    out = UserOut.model_validate(user, from_attributes=True)
    return UserRegisteredOut(
        **out.model_dump(),
        message=f"Forward your ride receipts to: {user.ingestion_email}",
    )


@router.get("/users/{identity}", response_model=UserOut)
def get_user_endpoint(identity: str, session: Session = Depends(db_session)) -> UserOut:
    user = get_user_or_404(session, identity=identity)
    return UserOut.model_validate(user, from_attributes=True)
