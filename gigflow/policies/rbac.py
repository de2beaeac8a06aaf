#gigflow/policies/rbac.py
from __future__ import annotations

import uuid
from dataclasses import dataclass

from gigflow.core.errors import Forbidden, NOT_GIG_OWNER
from gigflow.models.gig import Gig


@dataclass(frozen=True)
class Principal:
    user_id: uuid.UUID
    display_name: str


def is_gig_owner(user_id: uuid.UUID, gig: Gig) -> bool:
    return gig.owner_id == user_id


def require_gig_owner(user_id: uuid.UUID, gig: Gig) -> None:
    """
    The only authorization rule of the marketplace: hiring and reading a
    gig's bids are reserved to the user who posted it.
    """
    if not is_gig_owner(user_id, gig):
        raise Forbidden(NOT_GIG_OWNER)
