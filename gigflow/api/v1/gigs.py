# gigflow/api/v1/gigs.py
from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends

from gigflow.api.v1.errors import to_http
from gigflow.core.auth_deps import get_current_principal
from gigflow.core.deps import get_store
from gigflow.core.errors import MarketplaceError
from gigflow.db.store import EntityStore
from gigflow.policies.rbac import Principal
from gigflow.schemas.gigs import GigCreate, GigOut
from gigflow.services.gigs_service import GigService

router = APIRouter(prefix="/gigs")


def get_gig_service(store: EntityStore = Depends(get_store)) -> GigService:
    return GigService(store)


@router.post("", response_model=GigOut, status_code=201)
def post_gig(
    payload: GigCreate,
    principal: Principal = Depends(get_current_principal),
    gigs: GigService = Depends(get_gig_service),
):
    try:
        return gigs.post_gig(principal.user_id, payload)
    except MarketplaceError as exc:
        raise to_http(exc)


@router.get("", response_model=List[GigOut])
def list_open_gigs(gigs: GigService = Depends(get_gig_service)):
    """
    Public listing: Open gigs only.
    """
    try:
        return gigs.list_open_gigs()
    except MarketplaceError as exc:
        raise to_http(exc)


@router.get("/{gig_id}", response_model=GigOut)
def get_gig(gig_id: uuid.UUID, gigs: GigService = Depends(get_gig_service)):
    try:
        return gigs.get_gig(gig_id)
    except MarketplaceError as exc:
        raise to_http(exc)
