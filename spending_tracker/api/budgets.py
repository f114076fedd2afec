"""
Budget API endpoints.

Budgets belong to the authenticated user; reading or changing someone
else's budget is a 403, a missing or deleted one a 404.
"""
import logging
import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from spending_tracker.api.deps import get_current_user, get_owned_budget
from spending_tracker.db import models, schemas
from spending_tracker.db.database import get_db
from spending_tracker.db.repositories import budgets as budget_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/budgets", tags=["budgets"])

DATE_ORDER_MESSAGE = "Start date must be before end date"


def _ensure_date_order(start_date: date, end_date: date) -> None:
    if start_date >= end_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DATE_ORDER_MESSAGE)


def _ensure_budget_category(db: Session, category_id: Optional[uuid.UUID]) -> None:
    if category_id is not None and budget_repo.get_budget_category(db, category_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Budget category with ID {category_id} not found",
        )


@router.post("", response_model=schemas.Budget, status_code=status.HTTP_201_CREATED)
def create_budget_endpoint(
    budget: schemas.BudgetCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    _ensure_date_order(budget.start_date, budget.end_date)
    _ensure_budget_category(db, budget.category_id)
    created = budget_repo.create_budget(db, user.id, budget)
    logger.info("budget_created: id=%s user=%s", created.id, user.id)
    return created


@router.get("", response_model=schemas.BudgetPage)
def list_budgets_endpoint(
    period: Optional[models.BudgetPeriod] = Query(default=None),
    is_active: Optional[bool] = Query(default=None, alias="isActive"),
    category_id: Optional[uuid.UUID] = Query(default=None, alias="categoryId"),
    start_date_from: Optional[date] = Query(default=None, alias="startDateFrom"),
    start_date_to: Optional[date] = Query(default=None, alias="startDateTo"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    items, total = budget_repo.list_budgets(
        db,
        user.id,
        period=period,
        is_active=is_active,
        category_id=category_id,
        start_date_from=start_date_from,
        start_date_to=start_date_to,
        skip=(page - 1) * limit,
        limit=limit,
    )
    return {
        "data": items,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": schemas.total_pages(total, limit),
    }


@router.get("/active/list", response_model=List[schemas.Budget])
def list_active_budgets_endpoint(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return budget_repo.list_active_budgets(db, user.id)


@router.get("/{budget_id}", response_model=schemas.Budget)
def get_budget_endpoint(budget: models.Budget = Depends(get_owned_budget)):
    return budget


@router.put("/{budget_id}", response_model=schemas.Budget)
def update_budget_endpoint(
    update: schemas.BudgetUpdate,
    budget: models.Budget = Depends(get_owned_budget),
    db: Session = Depends(get_db),
):
    changes = update.model_dump(exclude_unset=True)
    # Explicit nulls only clear optional columns.
    for required in ("name", "amount", "period", "start_date", "end_date", "is_active", "alert_enabled", "alert_threshold"):
        if required in changes and changes[required] is None:
            del changes[required]
    if "start_date" in changes or "end_date" in changes:
        _ensure_date_order(
            changes.get("start_date") or budget.start_date,
            changes.get("end_date") or budget.end_date,
        )
    if "category_id" in changes:
        _ensure_budget_category(db, changes["category_id"])
    updated = budget_repo.update_budget(db, budget, changes)
    logger.info("budget_updated: id=%s fields=%s", updated.id, sorted(changes))
    return updated


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_budget_endpoint(
    budget: models.Budget = Depends(get_owned_budget),
    db: Session = Depends(get_db),
):
    budget_repo.soft_delete_budget(db, budget)
    logger.info("budget_deleted: id=%s", budget.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
