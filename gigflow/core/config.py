from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "GigFlow Marketplace"
    environment: str = "dev"
    log_level: str = "INFO"

    # ─────────── API ───────────
    api_prefix: str = "/api"
    request_id_header: str = "X-Request-Id"
    cors_origins: List[str] = ["http://localhost:5173"]

    # ─────────── DATABASE ───────────
    database_url: str = "sqlite:///./gigflow.db"
    auto_create_schema: bool = False
    store_timeout_seconds: float = 5.0  # lock / statement acknowledgement bound

    # ─────────── JWT / AUTH ───────────
    jwt_secret_key: str = "dev-only-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_access_token_minutes: int = 1440  # 24 hours
    auth_cookie_name: str = "token"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
