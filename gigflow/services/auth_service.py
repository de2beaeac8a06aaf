# gigflow/services/auth_service.py
from __future__ import annotations

import logging
import uuid
from typing import Optional

from jose import JWTError

from gigflow.core.config import Settings
from gigflow.core.errors import (
    EMAIL_TAKEN,
    EMPTY_NAME,
    EMPTY_PASSWORD,
    STORE_UNAVAILABLE,
    Conflict,
    InvalidInput,
    Unavailable,
)
from gigflow.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from gigflow.db.store import EntityStore, StoreConstraintViolation, StoreUnavailable
from gigflow.models.user import User
from gigflow.policies.rbac import Principal
from gigflow.schemas.auth import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, store: EntityStore, settings: Settings):
        self.store = store
        self.settings = settings

    def register(self, req: RegisterRequest) -> User:
        name = req.name.strip()
        if not name:
            raise InvalidInput(EMPTY_NAME)
        if not req.password:
            raise InvalidInput(EMPTY_PASSWORD)

        try:
            with self.store.transaction() as uow:
                user = uow.add(
                    User(
                        name=name,
                        email=req.email,
                        password_hash=hash_password(req.password),
                    )
                )
        except StoreConstraintViolation as exc:
            raise Conflict(EMAIL_TAKEN) from exc
        except StoreUnavailable as exc:
            raise Unavailable(STORE_UNAVAILABLE) from exc

        logger.info("[auth] registered user=%s", user.id)
        return user

    def authenticate(self, req: LoginRequest) -> Optional[Principal]:
        try:
            with self.store.transaction() as uow:
                user = next(uow.find(User, email=req.email), None)
        except StoreUnavailable as exc:
            raise Unavailable(STORE_UNAVAILABLE) from exc

        if not user:
            return None

        if not verify_password(req.password, user.password_hash):
            return None

        return Principal(user_id=user.id, display_name=user.name)

    def issue_token(self, principal: Principal) -> str:
        return create_access_token(
            self.settings,
            subject=str(principal.user_id),
            claims={"display_name": principal.display_name},
        )

    def resolve_identity(self, token: str) -> Optional[Principal]:
        """
        The identity gate: a token either resolves to a user identity or
        the caller is unauthenticated. Raw credentials stop here.
        """
        try:
            payload = decode_token(self.settings, token)
        except JWTError:
            return None

        sub = payload.get("sub")
        if not sub:
            return None

        try:
            user_id = uuid.UUID(str(sub))
        except ValueError:
            return None

        return Principal(
            user_id=user_id,
            display_name=str(payload.get("display_name") or "Unknown"),
        )
