"""
pizza_service.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, bootstrap admin password).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration with defaults that are safe for local dev.

    Every variable is read with the `PIZZA_` prefix, e.g. `PIZZA_JWT_SECRET`.
    """

    model_config = SettingsConfigDict(env_prefix="PIZZA_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "pizza-service"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "pizza-service"
    jwt_secret: str = Field(default="dev-secret-change-me", min_length=1, repr=False)
    # 0 disables the `exp` claim; revocation then relies on logout alone.
    jwt_ttl_minutes: int = Field(default=24 * 60, ge=0)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./pizza.db"

    # Seeded once when the user table is empty.
    bootstrap_admin_name: str = "常用名字"
    bootstrap_admin_email: str = "a@jwt.com"
    bootstrap_admin_password: str = Field(default="admin", repr=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `Settings(...)` directly and pass it to `create_app`, so nothing
# outside the API entrypoint should rely on the cached instance.
