# gigflow/core/lifecycle.py
from __future__ import annotations

from gigflow.core.errors import (
    BID_NOT_PENDING,
    Conflict,
    GIG_NOT_OPEN,
)
from gigflow.models.enums import BidStatus, GigStatus

ALLOWED_GIG_TRANSITIONS = {
    GigStatus.open: {GigStatus.assigned},
    GigStatus.assigned: set(),
}

ALLOWED_BID_TRANSITIONS = {
    BidStatus.pending: {BidStatus.hired, BidStatus.rejected},
    BidStatus.hired: set(),
    BidStatus.rejected: set(),
}


def gig_can_move(current: str, target: GigStatus) -> bool:
    return target in ALLOWED_GIG_TRANSITIONS.get(GigStatus(current), set())


def bid_can_move(current: str, target: BidStatus) -> bool:
    return target in ALLOWED_BID_TRANSITIONS.get(BidStatus(current), set())


def require_gig_open(status: str) -> None:
    # only an Open gig accepts bids or a hire
    if not gig_can_move(status, GigStatus.assigned):
        raise Conflict(GIG_NOT_OPEN)


def require_bid_pending(status: str) -> None:
    if not bid_can_move(status, BidStatus.hired):
        raise Conflict(BID_NOT_PENDING)
