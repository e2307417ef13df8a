"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    session_secret: str
    session_cookie_name: str = "gigflow_session"
    session_max_age_seconds: int = 7 * 24 * 60 * 60
    cors_allowed_origins: str | None = None
    hire_lock_timeout_seconds: float = 2.0
    bcrypt_rounds: int = 12
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def secure_cookies(self) -> bool:
        """Return true when session cookies must only travel over HTTPS."""
        return self.environment != "local"


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse CORS origins from a comma separated env value."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if not cleaned:
        return []
    if cleaned == "*":
        return ["*"]
    origins: list[str] = []
    for chunk in cleaned.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins
