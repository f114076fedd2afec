"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a SQLite
in-memory fallback for tests, and exposes the FastAPI session dependency
plus startup helpers (connection retries, migrations).
"""
import logging
import os
import sys
import time
from pathlib import Path

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from spending_tracker.db.config import get_database_settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test runs, so
    module import during collection relies on ``pytest`` being present in
    ``sys.modules``. ``PYTEST_RUNNING=1`` forces the behaviour explicitly.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    if "pytest" in sys.modules:
        return True
    return False


# Test override strategy:
# 1. TEST_DATABASE_URL (set by migration tests against a real Postgres) wins.
# 2. Under pytest without an explicit URL, use in-memory SQLite.
# 3. Otherwise build the engine from DatabaseSettings.
explicit_test_db = os.getenv("TEST_DATABASE_URL")
db_settings = get_database_settings()

if explicit_test_db:
    DATABASE_URL = explicit_test_db
    _engine_kwargs = {}
elif _is_pytest_runtime():
    DATABASE_URL = "sqlite+pysqlite:///:memory:"
    _engine_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
else:
    DATABASE_URL = db_settings.url
    _engine_kwargs = db_settings.engine_kwargs() if not str(DATABASE_URL).startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, **_engine_kwargs)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection.
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def is_sqlite() -> bool:
    return engine.dialect.name == "sqlite"


# In-memory SQLite shares one connection through StaticPool, so the schema has
# to exist before the first request touches it.
if is_sqlite() and ":memory:" in str(engine.url):
    from spending_tracker.db import models  # local import to avoid circular import at module load
    models.Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_database(bind: Engine = None) -> bool:
    """Return True when a trivial query succeeds on ``bind``."""
    bind = bind or engine
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except OperationalError as exc:
        logger.warning("database_check_failed: %s", exc)
        return False


def wait_for_database(bind: Engine = None, attempts: int = None, delay_ms: int = None, sleep=time.sleep) -> None:
    """Block until the database answers, retrying with a fixed delay.

    Raises the last ``OperationalError`` once ``attempts`` are exhausted.
    """
    bind = bind or engine
    attempts = attempts if attempts is not None else db_settings.retry_attempts
    delay_ms = delay_ms if delay_ms is not None else db_settings.retry_delay_ms
    for attempt in range(1, attempts + 1):
        try:
            with bind.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("database_ready: attempt=%s", attempt)
            return
        except OperationalError:
            if attempt == attempts:
                logger.error("database_unreachable: attempts=%s", attempts)
                raise
            logger.warning(
                "database_connect_retry: attempt=%s/%s delay_ms=%s", attempt, attempts, delay_ms
            )
            sleep(delay_ms / 1000.0)


def run_migrations(revision: str = "head") -> None:
    """Upgrade the schema with Alembic using the project's alembic.ini."""
    from alembic import command
    from alembic.config import Config

    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    url = engine.url.render_as_string(hide_password=False)
    cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    logger.info("running_migrations: target=%s", revision)
    command.upgrade(cfg, revision)
