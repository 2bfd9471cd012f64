"""
Configuration helpers for the storefront backend.

Settings are read once from environment variables; routers and services ask
for them through get_settings() instead of touching os.environ.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    database_url: str
    session_cookie_name: str
    session_ttl_seconds: int
    login_rate_limit: int
    login_rate_window_seconds: int
    admin_username: str
    admin_password: str
    seed_demo_data: bool
    cors_origins: tuple[str, ...]
    trust_proxy_headers: bool
    log_level: str

    @property
    def secure_cookies(self) -> bool:
        return self.app_env == "prod"


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    origins = tuple(o.strip().rstrip("/") for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "memory").strip().lower(),
        database_url=os.getenv("DATABASE_URL", "").strip(),
        session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "session").strip() or "session",
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS", "86400"), 86400),
        login_rate_limit=_int(os.getenv("LOGIN_RATE_LIMIT", "5"), 5),
        login_rate_window_seconds=_int(os.getenv("LOGIN_RATE_WINDOW_SECONDS", "900"), 900),
        admin_username=os.getenv("ADMIN_USERNAME", "admin@example.com").strip(),
        admin_password=os.getenv("ADMIN_PASSWORD", "changeme"),
        seed_demo_data=_bool(os.getenv("SEED_DEMO_DATA"), True),
        cors_origins=origins,
        trust_proxy_headers=_bool(os.getenv("TRUST_PROXY_HEADERS"), False),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
