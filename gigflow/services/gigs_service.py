# gigflow/services/gigs_service.py
from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import List

from gigflow.core.errors import (
    EMPTY_TITLE,
    GIG_NOT_FOUND,
    NEGATIVE_BUDGET,
    STORE_UNAVAILABLE,
    USER_NOT_FOUND,
    InvalidInput,
    NotFound,
    Unavailable,
)
from gigflow.db.store import EntityStore, StoreConstraintViolation, StoreUnavailable
from gigflow.models.enums import GigStatus
from gigflow.models.gig import Gig
from gigflow.schemas.gigs import GigCreate

logger = logging.getLogger(__name__)


class GigService:
    def __init__(self, store: EntityStore):
        self.store = store

    def post_gig(self, owner_user_id: uuid.UUID, req: GigCreate) -> Gig:
        title = req.title.strip()
        if not title:
            raise InvalidInput(EMPTY_TITLE)
        if req.budget < Decimal("0"):
            raise InvalidInput(NEGATIVE_BUDGET)

        try:
            with self.store.transaction() as uow:
                gig = uow.add(
                    Gig(
                        title=title,
                        description=req.description,
                        budget=req.budget,
                        owner_id=owner_user_id,
                        status=GigStatus.open.value,
                    )
                )
        except StoreConstraintViolation as exc:
            # owner id from a valid token that has no users row
            raise NotFound(USER_NOT_FOUND) from exc
        except StoreUnavailable as exc:
            raise Unavailable(STORE_UNAVAILABLE) from exc

        logger.info("[gigs] posted gig=%s owner=%s", gig.id, owner_user_id)
        return gig

    def list_open_gigs(self) -> List[Gig]:
        # not linearizable with hires; a just-assigned gig may still show briefly
        try:
            with self.store.transaction() as uow:
                return list(
                    uow.find(Gig, order_by=Gig.created_at.desc(), status=GigStatus.open.value)
                )
        except StoreUnavailable as exc:
            raise Unavailable(STORE_UNAVAILABLE) from exc

    def get_gig(self, gig_id: uuid.UUID) -> Gig:
        try:
            with self.store.transaction() as uow:
                gig = uow.get(Gig, gig_id)
        except StoreUnavailable as exc:
            raise Unavailable(STORE_UNAVAILABLE) from exc
        if gig is None:
            raise NotFound(GIG_NOT_FOUND)
        return gig
