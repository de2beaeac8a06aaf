# gigflow/api/v1/errors.py
from __future__ import annotations

from fastapi import HTTPException

from gigflow.core import errors as e

_STATUS = {
    e.NotFound: 404,
    e.Forbidden: 403,
    e.Conflict: 409,
    e.InvalidInput: 400,
    e.Unavailable: 503,
    e.InconsistentState: 500,
}

_MESSAGES = {
    e.BID_NOT_FOUND: "Bid not found.",
    e.GIG_NOT_FOUND: "Gig not found.",
    e.USER_NOT_FOUND: "User not found.",
    e.GIG_MISSING_FOR_BID: "Bid references a gig that does not exist.",
    e.NOT_GIG_OWNER: "Only the gig owner may do this.",
    e.GIG_NOT_OPEN: "Gig is no longer open.",
    e.BID_NOT_PENDING: "Bid has already been resolved.",
    e.EMAIL_TAKEN: "Email is already registered.",
    e.EMPTY_TITLE: "Title must not be empty.",
    e.NEGATIVE_BUDGET: "Budget must be zero or more.",
    e.EMPTY_MESSAGE: "Message must not be empty.",
    e.EMPTY_NAME: "Name must not be empty.",
    e.EMPTY_PASSWORD: "Password must not be empty.",
    e.STORE_UNAVAILABLE: "Service temporarily unavailable, retry the request.",
}


def to_http(exc: e.MarketplaceError) -> HTTPException:
    status = _STATUS.get(type(exc), 500)
    detail = _MESSAGES.get(exc.reason, "Internal error.")
    headers = {"Retry-After": "1"} if isinstance(exc, e.Unavailable) else None
    return HTTPException(
        status_code=status,
        detail={"error": exc.kind, "reason": exc.reason, "message": detail},
        headers=headers,
    )
