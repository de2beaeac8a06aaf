# gigflow/core/errors.py
from __future__ import annotations

from typing import Optional


class MarketplaceError(Exception):
    """
    Base for every typed failure the marketplace core reports.

    Carries a machine-readable ``kind`` and an optional ``reason`` code.
    Human-facing text is produced by the API layer, never here.
    """

    kind: str = "error"

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        super().__init__(f"{self.kind}:{reason}" if reason else self.kind)


class NotFound(MarketplaceError):
    kind = "not_found"


class Forbidden(MarketplaceError):
    kind = "forbidden"


class Conflict(MarketplaceError):
    kind = "conflict"


class InconsistentState(MarketplaceError):
    kind = "inconsistent_state"


class Unavailable(MarketplaceError):
    kind = "unavailable"


class InvalidInput(MarketplaceError):
    kind = "invalid_input"


# --- reason codes ---
BID_NOT_FOUND = "bid_not_found"
GIG_NOT_FOUND = "gig_not_found"
USER_NOT_FOUND = "user_not_found"
GIG_MISSING_FOR_BID = "gig_missing_for_bid"
NOT_GIG_OWNER = "not_gig_owner"
GIG_NOT_OPEN = "gig_not_open"
BID_NOT_PENDING = "bid_not_pending"
EMAIL_TAKEN = "email_taken"
EMPTY_TITLE = "empty_title"
NEGATIVE_BUDGET = "negative_budget"
EMPTY_MESSAGE = "empty_message"
EMPTY_NAME = "empty_name"
EMPTY_PASSWORD = "empty_password"
STORE_UNAVAILABLE = "store_unavailable"
