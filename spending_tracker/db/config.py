"""
Database configuration.

Reads connection, pool, SSL and retry settings from the environment and
turns them into SQLAlchemy engine arguments.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

from sqlalchemy.engine import URL

from spending_tracker.utils.settings import env_int, get_app_settings, normalize_bool


@dataclass(frozen=True)
class DatabaseSettings:
    host: str
    port: int
    username: str
    password: str
    database: str
    pool_max: int
    pool_min: int
    idle_timeout_ms: int
    connection_timeout_ms: int
    ssl: bool
    ssl_reject_unauthorized: bool
    retry_attempts: int
    retry_delay_ms: int
    run_migrations: bool
    logging: bool
    database_url: Optional[str] = None

    @property
    def url(self):
        """Connection URL; an explicit DATABASE_URL wins over the components."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+psycopg2",
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    def engine_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``create_engine`` against PostgreSQL."""
        pool_min = min(self.pool_min, self.pool_max)
        connect_args: Dict[str, Any] = {
            "connect_timeout": max(1, self.connection_timeout_ms // 1000),
        }
        if self.ssl:
            connect_args["sslmode"] = "verify-full" if self.ssl_reject_unauthorized else "require"
        return {
            "pool_size": pool_min,
            "max_overflow": max(0, self.pool_max - pool_min),
            "pool_recycle": max(1, self.idle_timeout_ms // 1000),
            "pool_timeout": max(1, self.connection_timeout_ms // 1000),
            "pool_pre_ping": True,
            "echo": self.logging,
            "connect_args": connect_args,
        }


@lru_cache(maxsize=None)
def get_database_settings() -> DatabaseSettings:
    """Return cached database settings sourced from the environment."""
    return DatabaseSettings(
        host=os.getenv("DB_HOST", "localhost"),
        port=env_int("DB_PORT", 5432),
        username=os.getenv("DB_USERNAME", "postgres"),
        password=os.getenv("DB_PASSWORD", "postgres"),
        database=os.getenv("DB_DATABASE", "spending_tracker"),
        pool_max=env_int("DB_POOL_MAX", 10),
        pool_min=env_int("DB_POOL_MIN", 2),
        idle_timeout_ms=env_int("DB_POOL_IDLE_TIMEOUT", 30000),
        connection_timeout_ms=env_int("DB_CONNECTION_TIMEOUT", 10000),
        ssl=normalize_bool(os.getenv("DB_SSL"), default=False),
        ssl_reject_unauthorized=normalize_bool(os.getenv("DB_SSL_REJECT_UNAUTHORIZED"), default=True),
        retry_attempts=max(1, env_int("DB_RETRY_ATTEMPTS", 3)),
        retry_delay_ms=max(0, env_int("DB_RETRY_DELAY", 3000)),
        run_migrations=normalize_bool(os.getenv("DB_RUN_MIGRATIONS"), default=False),
        logging=get_app_settings().is_development and normalize_bool(os.getenv("DB_LOGGING"), default=True),
        database_url=os.getenv("DATABASE_URL") or None,
    )


def refresh_database_settings_cache() -> None:
    """Invalidate cached database settings (useful for tests)."""
    get_database_settings.cache_clear()
