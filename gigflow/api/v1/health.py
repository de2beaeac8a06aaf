from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from gigflow.core.deps import get_store
from gigflow.db.store import EntityStore, StoreUnavailable

router = APIRouter()


@router.get("/health")
def health(request: Request, store: EntityStore = Depends(get_store)):
    rid = getattr(request.state, "request_id", None)
    try:
        store.ping()
    except StoreUnavailable:
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "database": "unavailable", "requestId": rid},
            headers={"Retry-After": "1"},
        )
    return {"status": "ok", "database": "ok", "requestId": rid}
