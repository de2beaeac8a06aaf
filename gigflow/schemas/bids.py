from __future__ import annotations

import uuid
from datetime import datetime

from gigflow.schemas.primitives import WireModel


class BidCreate(WireModel):
    gig_id: uuid.UUID
    message: str


class BidOut(WireModel):
    id: uuid.UUID
    gig_id: uuid.UUID
    freelancer_id: uuid.UUID
    freelancer_name: str
    message: str
    status: str
    created_at: datetime


class HireOut(WireModel):
    message: str = "Freelancer hired successfully"
    gig_id: uuid.UUID
    hired_bid_id: uuid.UUID
    rejected_count: int
