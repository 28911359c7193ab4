from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr


class UserCreate(BaseModel):
    email: EmailStr


class UserOut(BaseModel):
    id: uuid.UUID
    email: str
    ingestion_email: str
    created_at: datetime


class UserRegisteredOut(UserOut):
    message: str
