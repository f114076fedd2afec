"""
Budget repository functions.

Budgets are always scoped to their owner by the caller; lookups here only
hide soft-deleted rows so the API can tell "missing" from "not yours".
"""
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from spending_tracker.db import models, schemas


def list_budget_categories(db: Session) -> List[models.BudgetCategory]:
    return (
        db.query(models.BudgetCategory)
        .filter(models.BudgetCategory.deleted_at.is_(None))
        .order_by(models.BudgetCategory.name.asc())
        .all()
    )


def get_budget_category(db: Session, category_id: uuid.UUID) -> Optional[models.BudgetCategory]:
    return (
        db.query(models.BudgetCategory)
        .filter(models.BudgetCategory.id == category_id, models.BudgetCategory.deleted_at.is_(None))
        .first()
    )


def create_budget(db: Session, user_id: uuid.UUID, budget: schemas.BudgetCreate) -> models.Budget:
    db_budget = models.Budget(user_id=user_id, spent_amount=Decimal("0"), **budget.model_dump())
    db.add(db_budget)
    db.commit()
    db.refresh(db_budget)
    return db_budget


def get_budget(db: Session, budget_id: uuid.UUID) -> Optional[models.Budget]:
    return (
        db.query(models.Budget)
        .options(joinedload(models.Budget.category))
        .filter(models.Budget.id == budget_id, models.Budget.deleted_at.is_(None))
        .first()
    )


def get_user_budget(db: Session, user_id: uuid.UUID, budget_id: uuid.UUID) -> Optional[models.Budget]:
    budget = get_budget(db, budget_id)
    if budget is None or budget.user_id != user_id:
        return None
    return budget


def list_budgets(
    db: Session,
    user_id: uuid.UUID,
    *,
    period: Optional[models.BudgetPeriod] = None,
    is_active: Optional[bool] = None,
    category_id: Optional[uuid.UUID] = None,
    start_date_from: Optional[date] = None,
    start_date_to: Optional[date] = None,
    skip: int = 0,
    limit: int = 10,
) -> Tuple[List[models.Budget], int]:
    q = db.query(models.Budget).filter(
        models.Budget.user_id == user_id,
        models.Budget.deleted_at.is_(None),
    )
    if period is not None:
        q = q.filter(models.Budget.period == period)
    if is_active is not None:
        q = q.filter(models.Budget.is_active == is_active)
    if category_id is not None:
        q = q.filter(models.Budget.category_id == category_id)
    if start_date_from is not None:
        q = q.filter(models.Budget.start_date >= start_date_from)
    if start_date_to is not None:
        q = q.filter(models.Budget.start_date <= start_date_to)
    total = q.count()
    items = (
        q.options(joinedload(models.Budget.category))
        .order_by(models.Budget.created_at.desc(), models.Budget.id)
        .offset(skip)
        .limit(limit)
        .all()
    )
    return items, total


def list_active_budgets(db: Session, user_id: uuid.UUID) -> List[models.Budget]:
    return (
        db.query(models.Budget)
        .options(joinedload(models.Budget.category))
        .filter(
            models.Budget.user_id == user_id,
            models.Budget.is_active.is_(True),
            models.Budget.deleted_at.is_(None),
        )
        .order_by(models.Budget.created_at.desc())
        .all()
    )


def update_budget(db: Session, db_budget: models.Budget, changes: dict) -> models.Budget:
    for key, value in changes.items():
        setattr(db_budget, key, value)
    db.commit()
    db.refresh(db_budget)
    return db_budget


def soft_delete_budget(db: Session, db_budget: models.Budget) -> None:
    db_budget.deleted_at = models.now_utc()
    db.commit()


def adjust_spent_amount(db: Session, budget_id: Optional[uuid.UUID], delta: Decimal) -> None:
    """Shift a budget's spent total by ``delta``; the caller commits."""
    if budget_id is None or not delta:
        return
    # Increment in SQL; a previously loaded spent_amount may be stale.
    db.query(models.Budget).filter(models.Budget.id == budget_id).update(
        {models.Budget.spent_amount: models.Budget.spent_amount + Decimal(delta)},
        synchronize_session=False,
    )
