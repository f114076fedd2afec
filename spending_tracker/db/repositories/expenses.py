"""
Expense repository functions.

Listing and summary share one filter builder. Writes keep the linked
budget's ``spent_amount`` in step with the live expenses attached to it.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session, joinedload

from spending_tracker.db import models, schemas
from spending_tracker.db.repositories import budgets as budget_repo

CENTS = Decimal("0.01")


@dataclass
class ExpenseFilters:
    category_id: Optional[uuid.UUID] = None
    budget_id: Optional[uuid.UUID] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    search: Optional[str] = None
    include_deleted: bool = False


_SORT_COLUMNS = {
    schemas.ExpenseSortField.DATE: models.Expense.date,
    schemas.ExpenseSortField.AMOUNT: models.Expense.amount,
    schemas.ExpenseSortField.CREATED_AT: models.Expense.created_at,
    schemas.ExpenseSortField.DESCRIPTION: models.Expense.description,
}


def _to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENTS)


def _escape_like(term: str) -> str:
    """Make LIKE wildcards in a search term match literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _filtered_query(db: Session, user_id: uuid.UUID, filters: ExpenseFilters, *columns) -> Query:
    q = db.query(*columns).select_from(models.Expense) if columns else db.query(models.Expense)
    q = q.filter(models.Expense.user_id == user_id)
    if not filters.include_deleted:
        q = q.filter(models.Expense.deleted_at.is_(None))
    if filters.category_id is not None:
        q = q.filter(models.Expense.category_id == filters.category_id)
    if filters.budget_id is not None:
        q = q.filter(models.Expense.budget_id == filters.budget_id)
    if filters.start_date is not None:
        q = q.filter(models.Expense.date >= filters.start_date)
    if filters.end_date is not None:
        q = q.filter(models.Expense.date <= filters.end_date)
    if filters.min_amount is not None:
        q = q.filter(models.Expense.amount >= filters.min_amount)
    if filters.max_amount is not None:
        q = q.filter(models.Expense.amount <= filters.max_amount)
    if filters.search:
        pattern = f"%{_escape_like(filters.search.strip())}%"
        q = q.filter(
            or_(
                models.Expense.description.ilike(pattern, escape="\\"),
                models.Expense.notes.ilike(pattern, escape="\\"),
            )
        )
    return q


def create_expense(db: Session, user_id: uuid.UUID, expense: schemas.ExpenseCreate) -> models.Expense:
    db_expense = models.Expense(user_id=user_id, **expense.model_dump())
    db.add(db_expense)
    budget_repo.adjust_spent_amount(db, db_expense.budget_id, Decimal(db_expense.amount))
    db.commit()
    db.refresh(db_expense)
    return db_expense


def get_expense(
    db: Session,
    user_id: uuid.UUID,
    expense_id: uuid.UUID,
    *,
    include_deleted: bool = False,
) -> Optional[models.Expense]:
    q = (
        db.query(models.Expense)
        .options(joinedload(models.Expense.category), joinedload(models.Expense.budget))
        .filter(models.Expense.id == expense_id, models.Expense.user_id == user_id)
    )
    if not include_deleted:
        q = q.filter(models.Expense.deleted_at.is_(None))
    return q.first()


def list_expenses(
    db: Session,
    user_id: uuid.UUID,
    filters: ExpenseFilters,
    *,
    sort_by: schemas.ExpenseSortField = schemas.ExpenseSortField.DATE,
    sort_order: schemas.SortOrder = schemas.SortOrder.DESC,
    skip: int = 0,
    limit: int = 20,
) -> Tuple[List[models.Expense], int]:
    q = _filtered_query(db, user_id, filters)
    total = q.count()
    column = _SORT_COLUMNS[sort_by]
    ordering = column.asc() if sort_order == schemas.SortOrder.ASC else column.desc()
    items = (
        q.options(joinedload(models.Expense.category), joinedload(models.Expense.budget))
        .order_by(ordering, models.Expense.created_at.desc(), models.Expense.id)
        .offset(skip)
        .limit(limit)
        .all()
    )
    return items, total


def summarize_expenses(db: Session, user_id: uuid.UUID, filters: ExpenseFilters) -> dict:
    """Totals, min/max/average and a per-category breakdown over the filtered set."""
    total, count, average, minimum, maximum = _filtered_query(
        db,
        user_id,
        filters,
        func.sum(models.Expense.amount),
        func.count(models.Expense.id),
        func.avg(models.Expense.amount),
        func.min(models.Expense.amount),
        func.max(models.Expense.amount),
    ).one()

    breakdown_rows = (
        _filtered_query(
            db,
            user_id,
            filters,
            models.Category.id,
            models.Category.name,
            func.sum(models.Expense.amount),
            func.count(models.Expense.id),
        )
        .join(models.Category, models.Category.id == models.Expense.category_id)
        .group_by(models.Category.id, models.Category.name)
        .order_by(func.sum(models.Expense.amount).desc(), models.Category.name)
        .all()
    )

    summary = {
        "total_amount": _to_decimal(total),
        "count": int(count or 0),
        "average_amount": _to_decimal(average),
        "min_amount": _to_decimal(minimum),
        "max_amount": _to_decimal(maximum),
        "by_category": [
            {
                "category_id": category_id,
                "category_name": name,
                "total_amount": _to_decimal(cat_total),
                "count": int(cat_count or 0),
            }
            for category_id, name, cat_total, cat_count in breakdown_rows
        ],
    }
    if filters.start_date is not None or filters.end_date is not None:
        summary["date_range"] = {
            "start_date": filters.start_date or date(1970, 1, 1),
            "end_date": filters.end_date or date.today(),
        }
    return summary


def update_expense(db: Session, db_expense: models.Expense, changes: dict) -> models.Expense:
    old_budget_id = db_expense.budget_id
    old_amount = Decimal(db_expense.amount)
    for key, value in changes.items():
        setattr(db_expense, key, value)
    if db_expense.deleted_at is None:
        new_amount = Decimal(db_expense.amount)
        if old_budget_id == db_expense.budget_id:
            budget_repo.adjust_spent_amount(db, old_budget_id, new_amount - old_amount)
        else:
            budget_repo.adjust_spent_amount(db, old_budget_id, -old_amount)
            budget_repo.adjust_spent_amount(db, db_expense.budget_id, new_amount)
    db.commit()
    db.refresh(db_expense)
    return db_expense


def soft_delete_expense(db: Session, db_expense: models.Expense) -> None:
    if db_expense.deleted_at is None:
        budget_repo.adjust_spent_amount(db, db_expense.budget_id, -Decimal(db_expense.amount))
    db_expense.deleted_at = models.now_utc()
    db.commit()


def hard_delete_expense(db: Session, db_expense: models.Expense) -> None:
    if db_expense.deleted_at is None:
        budget_repo.adjust_spent_amount(db, db_expense.budget_id, -Decimal(db_expense.amount))
    db.delete(db_expense)
    db.commit()
