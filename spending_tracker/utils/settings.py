"""Application settings sourced from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "Spending Tracker API"
DEFAULT_APP_DESCRIPTION = "Personal finance tracking API for expenses, budgets and categories."


def normalize_bool(value: str | None, default: bool = False) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def env_int(name: str, default: int) -> int:
    """Read an integer env var, falling back to ``default`` when unset or malformed."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Invalid integer for %s=%r; using default %s", name, raw, default)
        return default


def _split_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


@dataclass(frozen=True)
class AppSettings:
    name: str
    description: str
    version: str
    environment: str
    port: int
    api_prefix: str
    cors_origins: Tuple[str, ...]
    log_level: str
    throttle_enabled: bool
    throttle_limit: int
    throttle_ttl_seconds: int

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache(maxsize=None)
def get_app_settings() -> AppSettings:
    """Return the cached application settings."""
    prefix = os.getenv("API_PREFIX", "").strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = f"/{prefix}"
    return AppSettings(
        name=os.getenv("APP_NAME", DEFAULT_APP_NAME),
        description=DEFAULT_APP_DESCRIPTION,
        version=os.getenv("APP_VERSION", "0.0.1"),
        environment=os.getenv("APP_ENV", "development").strip().lower() or "development",
        port=env_int("PORT", 3000),
        api_prefix=prefix,
        cors_origins=_split_origins(os.getenv("CORS_ORIGIN", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        throttle_enabled=normalize_bool(os.getenv("THROTTLE_ENABLED"), default=True),
        throttle_limit=max(1, env_int("THROTTLE_LIMIT", 10)),
        throttle_ttl_seconds=max(1, env_int("THROTTLE_TTL_SECONDS", 60)),
    )


def refresh_app_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_app_settings.cache_clear()
