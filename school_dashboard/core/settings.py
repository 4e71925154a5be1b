# PUBLIC_INTERFACE
"""
Application settings and configuration management.

Loads environment variables and exposes a typed Settings object.
No secrets are logged and defaults are safe for local development.
"""
from __future__ import annotations

import os
from typing import List

from pydantic import BaseModel, Field


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _pass_phrase_from_env() -> str | None:
    # The dashboard frontend ships the same value as NEXT_PUBLIC_SECRET_KEY.
    return os.getenv("IDENTITY_SECRET_KEY") or os.getenv("NEXT_PUBLIC_SECRET_KEY")


class Settings(BaseModel):
    """Service-level configuration loaded from environment variables."""
    app_name: str = Field(default="School Dashboard Backend", description="Human-readable app name")
    environment: str = Field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"), description="Environment name")
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: _env_int("PORT", 3001))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "info"))
    cors_allowed_origins: List[str] = Field(
        default_factory=lambda: [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]
    )
    identity_secret_key: str | None = Field(
        default_factory=_pass_phrase_from_env,
        description="Pass-phrase shared by every site that issues or reads identity cookies",
    )
    identity_token_scheme: str = Field(
        default_factory=lambda: os.getenv("IDENTITY_TOKEN_SCHEME", "xor").strip().lower(),
        description="'xor' keeps cookies compatible with the dashboard frontend, 'aesgcm' switches to authenticated tokens",
    )
    identity_cookie_max_age: int = Field(
        default_factory=lambda: _env_int("IDENTITY_COOKIE_MAX_AGE", 3600),
        description="Lifetime of identity cookies in seconds",
    )
    request_id_header: str = Field(default="X-Request-Id", description="Header name for request id propagation")
    supabase_url: str | None = Field(default_factory=lambda: os.getenv("SUPABASE_URL"), description="PostgREST base URL; in-memory directory when unset")
    supabase_anon_key: str | None = Field(default_factory=lambda: os.getenv("SUPABASE_ANON_KEY"))

    @property
    def cookie_secure(self) -> bool:
        """Identity cookies only travel over HTTPS in production."""
        return self.environment.strip().lower() == "production"


_settings: Settings | None = None


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return a singleton Settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
