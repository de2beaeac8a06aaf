#gigflow/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from gigflow.api.v1.errors import to_http
from gigflow.core.auth_deps import get_auth_service, get_current_principal
from gigflow.core.config import Settings
from gigflow.core.deps import get_app_settings
from gigflow.core.errors import MarketplaceError
from gigflow.policies.rbac import Principal
from gigflow.schemas.auth import IdentityOut, LoginRequest, RegisterRequest, TokenResponse, UserOut
from gigflow.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=UserOut, status_code=201)
def register(req: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    try:
        return auth.register(req)
    except MarketplaceError as exc:
        raise to_http(exc)


@router.post("/login", response_model=TokenResponse)
def login(
    req: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
):
    try:
        principal = auth.authenticate(req)
    except MarketplaceError as exc:
        raise to_http(exc)

    if not principal:
        raise HTTPException(status_code=401, detail="Invalid credentials.")

    token = auth.issue_token(principal)
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        httponly=True,
        samesite="lax",
        max_age=settings.jwt_access_token_minutes * 60,
    )
    return TokenResponse(
        access_token=token,
        user_id=principal.user_id,
        name=principal.display_name,
    )


@router.post("/logout")
def logout(response: Response, settings: Settings = Depends(get_app_settings)):
    response.delete_cookie(settings.auth_cookie_name)
    return {"status": "logged out"}


@router.get("/me", response_model=IdentityOut)
def get_me(principal: Principal = Depends(get_current_principal)):
    return IdentityOut(user_id=principal.user_id, display_name=principal.display_name)
