"""
Configuration helpers for the profiles backend.

Settings are read from environment variables once and passed explicitly into
the app factory and the components it wires, so routers/services do not fetch
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    jwt_secret: str
    jwt_algorithm: str
    log_level: str
    log_file: str
    cors_allowed_origins: tuple[str, ...]
    sql_echo: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _list(value: str | None) -> tuple[str, ...]:
        items = [item.strip() for item in (value or "").split(",")]
        return tuple(item for item in items if item)

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "sqlite:///./profiles.db").strip(),
        # JWTSKEY is the variable name the auth service shares with us
        jwt_secret=os.getenv("JWT_SECRET") or os.getenv("JWTSKEY", ""),
        jwt_algorithm=(os.getenv("JWT_ALGORITHM") or "HS256").upper(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("LOG_FILE", ""),
        cors_allowed_origins=_list(os.getenv("CORS_ALLOWED_ORIGINS", "*")),
        sql_echo=_bool(os.getenv("SQL_ECHO"), False),
    )
