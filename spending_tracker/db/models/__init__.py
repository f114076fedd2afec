"""
SQLAlchemy models split by domain.

Exposes `Base`, `now_utc` and every ORM class so callers can use
`from spending_tracker.db import models` and reach `models.Expense` etc.
"""

from .base import Base, TimestampMixin, now_utc  # re-export

from .users import User
from .categories import Category
from .budgets import Budget, BudgetCategory, BudgetPeriod
from .expenses import Expense

__all__ = [
    "Base",
    "TimestampMixin",
    "now_utc",
    "User",
    "Category",
    "Budget",
    "BudgetCategory",
    "BudgetPeriod",
    "Expense",
]
