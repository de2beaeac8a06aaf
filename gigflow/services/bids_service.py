# gigflow/services/bids_service.py
from __future__ import annotations

import logging
import uuid
from typing import List

from gigflow.core.errors import (
    EMPTY_MESSAGE,
    GIG_NOT_FOUND,
    GIG_NOT_OPEN,
    STORE_UNAVAILABLE,
    USER_NOT_FOUND,
    Conflict,
    InvalidInput,
    NotFound,
    Unavailable,
)
from gigflow.core.lifecycle import require_gig_open
from gigflow.db.store import EntityStore, StoreConstraintViolation, StoreUnavailable
from gigflow.models.bid import Bid
from gigflow.models.enums import BidStatus, GigStatus
from gigflow.models.gig import Gig
from gigflow.policies.rbac import require_gig_owner
from gigflow.schemas.bids import BidCreate

logger = logging.getLogger(__name__)


class BidService:
    def __init__(self, store: EntityStore):
        self.store = store

    def place_bid(
        self,
        freelancer_user_id: uuid.UUID,
        freelancer_name: str,
        req: BidCreate,
    ) -> Bid:
        """
        Gig must exist and be Open, then the message must be non-empty.

        The insert itself is check-open-and-insert in one statement: a hire
        committing after the checks below cannot leave a Pending orphan.
        """
        message = req.message.strip()
        bid = Bid(
            id=uuid.uuid4(),
            gig_id=req.gig_id,
            freelancer_id=freelancer_user_id,
            freelancer_name=freelancer_name,
            message=message,
            status=BidStatus.pending.value,
        )

        try:
            with self.store.transaction() as uow:
                gig = uow.get(Gig, req.gig_id)
                if gig is None:
                    raise NotFound(GIG_NOT_FOUND)
                require_gig_open(gig.status)
                if not message:
                    raise InvalidInput(EMPTY_MESSAGE)

                written = uow.insert_guarded(
                    bid,
                    Gig,
                    {"id": req.gig_id, "status": GigStatus.open.value},
                )
                if not written:
                    # assigned between the read above and the insert
                    raise Conflict(GIG_NOT_OPEN)

                stored = uow.get(Bid, bid.id)
        except StoreConstraintViolation as exc:
            # freelancer id from a valid token that has no users row
            raise NotFound(USER_NOT_FOUND) from exc
        except StoreUnavailable as exc:
            raise Unavailable(STORE_UNAVAILABLE) from exc

        logger.info(
            "[bids] placed bid=%s gig=%s freelancer=%s",
            stored.id,
            stored.gig_id,
            freelancer_user_id,
        )
        return stored

    def list_bids_for_gig(self, requesting_user_id: uuid.UUID, gig_id: uuid.UUID) -> List[Bid]:
        try:
            with self.store.transaction() as uow:
                gig = uow.get(Gig, gig_id)
                if gig is None:
                    raise NotFound(GIG_NOT_FOUND)
                require_gig_owner(requesting_user_id, gig)
                return list(uow.find(Bid, order_by=Bid.created_at.asc(), gig_id=gig_id))
        except StoreUnavailable as exc:
            raise Unavailable(STORE_UNAVAILABLE) from exc
