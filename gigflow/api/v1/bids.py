# gigflow/api/v1/bids.py
from __future__ import annotations

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends

from gigflow.api.v1.errors import to_http
from gigflow.core.auth_deps import get_current_principal
from gigflow.core.deps import get_store
from gigflow.core.errors import MarketplaceError
from gigflow.db.store import EntityStore
from gigflow.policies.rbac import Principal
from gigflow.schemas.bids import BidCreate, BidOut, HireOut
from gigflow.services.bids_service import BidService
from gigflow.services.hiring_service import HiringCoordinator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bids")


def get_bid_service(store: EntityStore = Depends(get_store)) -> BidService:
    return BidService(store)


def get_hiring_coordinator(store: EntityStore = Depends(get_store)) -> HiringCoordinator:
    return HiringCoordinator(store)


# ---------------------------------------------------------------------
# POST /bids  (freelancer applies)
# ---------------------------------------------------------------------


@router.post("", response_model=BidOut, status_code=201)
def place_bid(
    payload: BidCreate,
    principal: Principal = Depends(get_current_principal),
    bids: BidService = Depends(get_bid_service),
):
    try:
        return bids.place_bid(principal.user_id, principal.display_name, payload)
    except MarketplaceError as exc:
        raise to_http(exc)


# ---------------------------------------------------------------------
# PUT /bids/hire/{bid_id}  (gig owner hires)
# ---------------------------------------------------------------------


@router.put("/hire/{bid_id}", response_model=HireOut)
def hire(
    bid_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    coordinator: HiringCoordinator = Depends(get_hiring_coordinator),
):
    logger.info("[hire] request principal=%s bid=%s", principal.user_id, bid_id)
    try:
        result = coordinator.hire(principal.user_id, bid_id)
    except MarketplaceError as exc:
        raise to_http(exc)

    return HireOut(
        gig_id=result.gig_id,
        hired_bid_id=result.hired_bid_id,
        rejected_count=result.rejected_count,
    )


# ---------------------------------------------------------------------
# GET /bids/{gig_id}  (owner view)
# ---------------------------------------------------------------------


@router.get("/{gig_id}", response_model=List[BidOut])
def list_bids_for_gig(
    gig_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    bids: BidService = Depends(get_bid_service),
):
    try:
        return bids.list_bids_for_gig(principal.user_id, gig_id)
    except MarketplaceError as exc:
        raise to_http(exc)
