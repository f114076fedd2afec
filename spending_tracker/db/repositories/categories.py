"""
Category repository functions.

Soft-deleted categories are invisible to every lookup here; name uniqueness
is only enforced among live rows.
"""
from __future__ import annotations

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from spending_tracker.db import models, schemas


def create_category(db: Session, category: schemas.CategoryCreate) -> models.Category:
    db_category = models.Category(
        name=category.name,
        color=category.color,
        icon=category.icon,
        description=category.description,
        is_system=False,
    )
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


def get_category(db: Session, category_id: uuid.UUID) -> Optional[models.Category]:
    return (
        db.query(models.Category)
        .filter(models.Category.id == category_id, models.Category.deleted_at.is_(None))
        .first()
    )


def get_category_by_name(
    db: Session,
    name: str,
    *,
    exclude_id: Optional[uuid.UUID] = None,
) -> Optional[models.Category]:
    q = db.query(models.Category).filter(
        models.Category.name == name,
        models.Category.deleted_at.is_(None),
    )
    if exclude_id is not None:
        q = q.filter(models.Category.id != exclude_id)
    return q.first()


def list_categories_with_counts(db: Session) -> List[Tuple[models.Category, int]]:
    """Live categories (system first, then by name) with their live expense counts."""
    rows = (
        db.query(models.Category, func.count(models.Expense.id))
        .outerjoin(
            models.Expense,
            and_(
                models.Expense.category_id == models.Category.id,
                models.Expense.deleted_at.is_(None),
            ),
        )
        .filter(models.Category.deleted_at.is_(None))
        .group_by(models.Category.id)
        .order_by(models.Category.is_system.desc(), models.Category.name.asc())
        .all()
    )
    return [(category, int(count or 0)) for category, count in rows]


def count_active_expenses(db: Session, category_id: uuid.UUID) -> int:
    return (
        db.query(func.count(models.Expense.id))
        .filter(models.Expense.category_id == category_id, models.Expense.deleted_at.is_(None))
        .scalar()
        or 0
    )


def update_category(db: Session, db_category: models.Category, changes: dict) -> models.Category:
    for key, value in changes.items():
        setattr(db_category, key, value)
    db.commit()
    db.refresh(db_category)
    return db_category


def soft_delete_category(db: Session, db_category: models.Category) -> None:
    db_category.deleted_at = models.now_utc()
    db.commit()
