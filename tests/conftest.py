import os
import uuid
from datetime import date
from decimal import Decimal

# Configure the app for tests before anything imports it.
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.setdefault("APP_ENV", "test")
os.environ["THROTTLE_ENABLED"] = "false"
os.environ.pop("DEV_MODE", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from spending_tracker.db import models
from spending_tracker.db.database import SessionLocal, engine
from spending_tracker.utils.settings import refresh_app_settings_cache


@pytest.fixture(scope="session", autouse=True)
def create_schema_once():
    """Create all tables once per test session (SQLite in-memory resets per process)."""
    models.Base.metadata.create_all(bind=engine)
    yield
    models.Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_data():
    """Truncate all tables between tests without dropping metadata (faster)."""
    connection = engine.connect()
    trans = connection.begin()
    for table in reversed(models.Base.metadata.sorted_tables):
        connection.execute(table.delete())
    trans.commit()
    connection.close()
    yield


@pytest.fixture(autouse=True)
def _fresh_settings():
    refresh_app_settings_cache()
    yield
    refresh_app_settings_cache()


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    from spending_tracker.api.main import app
    return TestClient(app)


def _h(email: str) -> dict:
    return {"x-auth-request-user": email.split("@")[0], "x-auth-request-email": email}


@pytest.fixture
def auth_headers():
    return _h


@pytest.fixture
def user_email():
    return f"user_{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture
def user_factory(db_session: Session):
    def _create(email: str = None, role: str = 'user', display_name: str = None):
        email = email or f"user_{uuid.uuid4().hex[:8]}@example.com"
        user = models.User(email=email, display_name=display_name or email.split('@')[0], role=role)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture
def category_factory(db_session: Session):
    def _create(name: str = None, is_system: bool = False, color: str = "#123456"):
        category = models.Category(
            name=name or f"Category {uuid.uuid4().hex[:6]}",
            color=color,
            is_system=is_system,
        )
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category
    return _create


@pytest.fixture
def budget_category_factory(db_session: Session):
    def _create(name: str = None):
        category = models.BudgetCategory(name=name or f"Budget Cat {uuid.uuid4().hex[:6]}", color="#4CAF50")
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category
    return _create


@pytest.fixture
def budget_factory(db_session: Session):
    def _create(user, name: str = "Monthly groceries", amount: str = "500.00", **overrides):
        values = dict(
            user_id=user.id,
            name=name,
            amount=Decimal(amount),
            period=models.BudgetPeriod.MONTHLY,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            spent_amount=Decimal("0"),
        )
        values.update(overrides)
        budget = models.Budget(**values)
        db_session.add(budget)
        db_session.commit()
        db_session.refresh(budget)
        return budget
    return _create
