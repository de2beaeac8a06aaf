from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field

from gigflow.schemas.primitives import WireModel


class RegisterRequest(WireModel):
    name: str = Field(..., max_length=128)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., max_length=72, description="bcrypt limit")


class LoginRequest(WireModel):
    email: str
    password: str


class TokenResponse(WireModel):
    access_token: str
    token_type: str = "bearer"
    user_id: uuid.UUID
    name: str


class UserOut(WireModel):
    id: uuid.UUID
    name: str
    email: str
    created_at: datetime


class IdentityOut(WireModel):
    user_id: uuid.UUID
    display_name: str
