"""
Expense API endpoints.

Expenses are private to their owner: other users' rows answer 404. Category
and budget references are checked on every write.
"""
import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from spending_tracker.api.deps import get_current_user
from spending_tracker.db import models, schemas
from spending_tracker.db.database import get_db
from spending_tracker.db.repositories import budgets as budget_repo
from spending_tracker.db.repositories import categories as category_repo
from spending_tracker.db.repositories import expenses as expense_repo
from spending_tracker.db.repositories.expenses import ExpenseFilters

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])

INVALID_REFERENCE_MESSAGE = "Invalid category or budget ID provided"


def expense_filters(
    category_id: Optional[uuid.UUID] = Query(default=None, alias="categoryId"),
    budget_id: Optional[uuid.UUID] = Query(default=None, alias="budgetId"),
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    min_amount: Optional[Decimal] = Query(default=None, alias="minAmount", ge=0),
    max_amount: Optional[Decimal] = Query(default=None, alias="maxAmount", ge=0),
    search: Optional[str] = Query(default=None, max_length=255),
    include_deleted: bool = Query(default=False, alias="includeDeleted"),
) -> ExpenseFilters:
    return ExpenseFilters(
        category_id=category_id,
        budget_id=budget_id,
        start_date=start_date,
        end_date=end_date,
        min_amount=min_amount,
        max_amount=max_amount,
        search=search or None,
        include_deleted=include_deleted,
    )


def _ensure_references(
    db: Session,
    user: models.User,
    category_id: Optional[uuid.UUID],
    budget_id: Optional[uuid.UUID],
) -> None:
    if category_id is not None and category_repo.get_category(db, category_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_REFERENCE_MESSAGE)
    if budget_id is not None and budget_repo.get_user_budget(db, user.id, budget_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_REFERENCE_MESSAGE)


def _get_expense_or_404(db: Session, user: models.User, expense_id: uuid.UUID, include_deleted: bool = False):
    expense = expense_repo.get_expense(db, user.id, expense_id, include_deleted=include_deleted)
    if expense is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Expense with ID {expense_id} not found")
    return expense


@router.post("", response_model=schemas.Expense, status_code=status.HTTP_201_CREATED)
def create_expense_endpoint(
    expense: schemas.ExpenseCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    _ensure_references(db, user, expense.category_id, expense.budget_id)
    try:
        created = expense_repo.create_expense(db, user.id, expense)
    except IntegrityError:
        db.rollback()
        logger.warning("expense_create_integrity_error: user=%s", user.id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_REFERENCE_MESSAGE)
    logger.info("expense_created: id=%s user=%s amount=%s", created.id, user.id, created.amount)
    return created


@router.get("", response_model=schemas.ExpensePage)
def list_expenses_endpoint(
    filters: ExpenseFilters = Depends(expense_filters),
    sort_by: schemas.ExpenseSortField = Query(default=schemas.ExpenseSortField.DATE, alias="sortBy"),
    sort_order: schemas.SortOrder = Query(default=schemas.SortOrder.DESC, alias="sortOrder"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    items, total = expense_repo.list_expenses(
        db,
        user.id,
        filters,
        sort_by=sort_by,
        sort_order=sort_order,
        skip=(page - 1) * limit,
        limit=limit,
    )
    pages = schemas.total_pages(total, limit)
    return {
        "data": items,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": pages,
        "has_next": page < pages,
        "has_previous": page > 1,
    }


@router.get("/summary", response_model=schemas.ExpenseSummary)
def expense_summary_endpoint(
    filters: ExpenseFilters = Depends(expense_filters),
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return expense_repo.summarize_expenses(db, user.id, filters)


@router.get("/{expense_id}", response_model=schemas.Expense)
def get_expense_endpoint(
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return _get_expense_or_404(db, user, expense_id)


@router.patch("/{expense_id}", response_model=schemas.Expense)
def update_expense_endpoint(
    expense_id: uuid.UUID,
    update: schemas.ExpenseUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    db_expense = _get_expense_or_404(db, user, expense_id)
    changes = update.model_dump(exclude_unset=True)
    # Explicit nulls only clear optional columns.
    for required in ("description", "amount", "date", "category_id"):
        if required in changes and changes[required] is None:
            del changes[required]
    _ensure_references(db, user, changes.get("category_id"), changes.get("budget_id"))
    try:
        updated = expense_repo.update_expense(db, db_expense, changes)
    except IntegrityError:
        db.rollback()
        logger.warning("expense_update_integrity_error: id=%s", expense_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_REFERENCE_MESSAGE)
    logger.info("expense_updated: id=%s fields=%s", expense_id, sorted(changes))
    return updated


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense_endpoint(
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    db_expense = _get_expense_or_404(db, user, expense_id)
    expense_repo.soft_delete_expense(db, db_expense)
    logger.info("expense_deleted: id=%s", expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{expense_id}/permanent", status_code=status.HTTP_204_NO_CONTENT)
def hard_delete_expense_endpoint(
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    db_expense = _get_expense_or_404(db, user, expense_id, include_deleted=True)
    expense_repo.hard_delete_expense(db, db_expense)
    logger.info("expense_permanently_deleted: id=%s", expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
