from __future__ import annotations

import os
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

from tests.pg_utils import postgres_container


def _make_alembic_config(database_url: str) -> Config:
    """Return an Alembic config pointing at the project migrations."""
    project_root = Path(__file__).resolve().parents[3]
    cfg = Config(str(project_root / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    cfg.set_main_option("script_location", str(project_root / "migrations"))
    return cfg


pytestmark = [
    pytest.mark.integration,
    pytest.mark.slow,
    pytest.mark.skipif(os.getenv("SKIP_ALEMBIC_FIXTURES") == "1", reason="SKIP_ALEMBIC_FIXTURES=1"),
]


def test_alembic_upgrade_and_downgrade_cycle() -> None:
    """Migrations upgrade from base to head and cleanly downgrade back to base."""
    with postgres_container() as database_url:
        cfg = _make_alembic_config(database_url)

        command.upgrade(cfg, "head")
        command.downgrade(cfg, "base")
        command.upgrade(cfg, "head")

        engine = create_engine(database_url)
        try:
            tables = set(inspect(engine).get_table_names())
            assert {"users", "categories", "budget_categories", "budgets", "expenses"} <= tables
        finally:
            engine.dispose()

        command.downgrade(cfg, "base")
        engine = create_engine(database_url)
        try:
            tables = set(inspect(engine).get_table_names())
            assert tables <= {"alembic_version"}
            with engine.connect() as conn:
                enum_count = conn.execute(
                    text("SELECT count(*) FROM pg_type WHERE typname = 'budget_period'")
                ).scalar()
            assert enum_count == 0
        finally:
            engine.dispose()


def test_seed_data_and_constraints() -> None:
    with postgres_container() as database_url:
        command.upgrade(_make_alembic_config(database_url), "head")
        engine = create_engine(database_url)
        try:
            with engine.connect() as conn:
                system = conn.execute(
                    text("SELECT count(*) FROM categories WHERE is_system AND deleted_at IS NULL")
                ).scalar()
                budget_categories = conn.execute(text("SELECT count(*) FROM budget_categories")).scalar()
            assert system == 9
            assert budget_categories == 10

            # Names are unique among live categories only.
            with engine.begin() as conn:
                conn.execute(text("INSERT INTO categories (name) VALUES ('Hobbies')"))
                conn.execute(text("UPDATE categories SET deleted_at = now() WHERE name = 'Hobbies'"))
                conn.execute(text("INSERT INTO categories (name) VALUES ('Hobbies')"))
            with pytest.raises(IntegrityError):
                with engine.begin() as conn:
                    conn.execute(text("INSERT INTO categories (name) VALUES ('Hobbies')"))

            with engine.begin() as conn:
                user_id = conn.execute(
                    text("INSERT INTO users (email) VALUES ('owner@example.com') RETURNING id")
                ).scalar()
                category_id = conn.execute(
                    text("SELECT id FROM categories WHERE name = 'Hobbies' AND deleted_at IS NULL")
                ).scalar()
            with pytest.raises(IntegrityError):
                with engine.begin() as conn:
                    conn.execute(
                        text(
                            "INSERT INTO expenses (user_id, description, amount, date, category_id) "
                            "VALUES (:u, 'Free lunch', 0, CURRENT_DATE, :c)"
                        ),
                        {"u": user_id, "c": category_id},
                    )
        finally:
            engine.dispose()
