#gigflow/core/auth_deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gigflow.core.config import Settings
from gigflow.core.deps import get_app_settings, get_store
from gigflow.db.store import EntityStore
from gigflow.policies.rbac import Principal
from gigflow.services.auth_service import AuthService

bearer = HTTPBearer(auto_error=False)


def get_auth_service(
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(store, settings)


def get_current_principal(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    settings: Settings = Depends(get_app_settings),
    auth: AuthService = Depends(get_auth_service),
) -> Principal:
    """
    Canonical authentication dependency.

    Accepts an Authorization: Bearer header, falling back to the HttpOnly
    auth cookie set at login.
    """
    token = creds.credentials if creds else request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated.")

    principal = auth.resolve_identity(token)
    if principal is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token.")

    # Make principal available to downstream handlers
    request.state.principal = principal

    return principal
