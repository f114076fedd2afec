"""
Budget category API endpoints (read-only seed data).
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from spending_tracker.db import schemas
from spending_tracker.db.database import get_db
from spending_tracker.db.repositories import budgets as budget_repo

router = APIRouter(prefix="/budget-categories", tags=["budgets"])


@router.get("", response_model=List[schemas.BudgetCategory])
def list_budget_categories_endpoint(db: Session = Depends(get_db)):
    return budget_repo.list_budget_categories(db)
