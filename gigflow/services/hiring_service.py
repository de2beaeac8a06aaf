# gigflow/services/hiring_service.py
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Tuple

from gigflow.core.errors import (
    BID_NOT_FOUND,
    BID_NOT_PENDING,
    GIG_MISSING_FOR_BID,
    GIG_NOT_OPEN,
    STORE_UNAVAILABLE,
    Conflict,
    InconsistentState,
    NotFound,
    Unavailable,
)
from gigflow.core.lifecycle import require_bid_pending, require_gig_open
from gigflow.db.store import (
    EntityStore,
    StoreConstraintViolation,
    StoreUnavailable,
    UnitOfWork,
)
from gigflow.models.bid import Bid
from gigflow.models.enums import BidStatus, GigStatus
from gigflow.models.gig import Gig
from gigflow.policies.rbac import require_gig_owner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HireResult:
    gig_id: uuid.UUID
    hired_bid_id: uuid.UUID
    rejected_count: int


class HiringCoordinator:
    """
    Closes a gig by hiring one of its bids.

    One call runs one store transaction:
    - lock the gig row, re-read its owner and status
    - Open -> Assigned on the gig (compare-and-set)
    - Pending -> Hired on the target bid (compare-and-set)
    - Pending -> Rejected on every sibling bid

    Any failure rolls the whole transaction back. Preconditions are
    re-evaluated on every call, so retrying after Unavailable is safe.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    def hire(self, requesting_user_id: uuid.UUID, bid_id: uuid.UUID) -> HireResult:
        try:
            with self.store.transaction() as uow:
                gig, bid = self._check_preconditions(uow, requesting_user_id, bid_id)
                rejected = self._transition(uow, gig, bid)
        except Conflict as exc:
            logger.info("[hire] conflict bid=%s reason=%s", bid_id, exc.reason)
            raise
        except StoreConstraintViolation as exc:
            # partial unique index on Hired bids caught a concurrent hire
            logger.info("[hire] constraint rejected bid=%s", bid_id)
            raise Conflict(GIG_NOT_OPEN) from exc
        except StoreUnavailable as exc:
            logger.warning("[hire] store unavailable bid=%s", bid_id)
            raise Unavailable(STORE_UNAVAILABLE) from exc

        logger.info(
            "[hire] gig=%s hired_bid=%s rejected=%d", gig.id, bid.id, rejected
        )
        return HireResult(gig_id=gig.id, hired_bid_id=bid.id, rejected_count=rejected)

    # ---------------------------
    # PRECONDITIONS
    # ---------------------------

    def _check_preconditions(
        self,
        uow: UnitOfWork,
        requesting_user_id: uuid.UUID,
        bid_id: uuid.UUID,
    ) -> Tuple[Gig, Bid]:
        bid = uow.get(Bid, bid_id)
        if bid is None:
            raise NotFound(BID_NOT_FOUND)

        # owner and status come from the locked row, never from a cached copy
        gig = uow.get(Gig, bid.gig_id, for_update=True)
        if gig is None:
            logger.error("[hire] bid=%s references missing gig=%s", bid.id, bid.gig_id)
            raise InconsistentState(GIG_MISSING_FOR_BID)

        require_gig_owner(requesting_user_id, gig)
        require_gig_open(gig.status)
        require_bid_pending(bid.status)
        return gig, bid

    # ---------------------------
    # TRANSITION
    # ---------------------------

    def _transition(self, uow: UnitOfWork, gig: Gig, bid: Bid) -> int:
        assigned = uow.atomic_update(
            Gig,
            gig.id,
            {"status": GigStatus.assigned.value},
            expect={"status": GigStatus.open.value},
        )
        if assigned is None:
            raise Conflict(GIG_NOT_OPEN)

        hired = uow.atomic_update(
            Bid,
            bid.id,
            {"status": BidStatus.hired.value},
            expect={"gig_id": gig.id, "status": BidStatus.pending.value},
        )
        if hired is None:
            raise Conflict(BID_NOT_PENDING)

        # the target is Hired now, so this touches siblings only
        return uow.atomic_bulk_update(
            Bid,
            {"gig_id": gig.id, "status": BidStatus.pending.value},
            {"status": BidStatus.rejected.value},
        )
