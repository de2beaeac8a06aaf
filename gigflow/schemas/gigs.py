from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import Field

from gigflow.schemas.primitives import WireModel


class GigCreate(WireModel):
    title: str = Field(..., max_length=256)
    description: str = Field(default="")
    budget: Decimal = Field(..., max_digits=12, decimal_places=2, description="non-negative amount")


class GigOut(WireModel):
    id: uuid.UUID
    title: str
    description: str
    budget: Decimal
    owner_id: uuid.UUID
    status: str
    created_at: datetime
