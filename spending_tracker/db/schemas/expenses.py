import datetime as dt
import uuid
from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import Field

from .budgets import BudgetSummary
from .categories import CategorySummary
from .common import ApiModel, Money, Page


class ExpenseSortField(str, Enum):
    DATE = "date"
    AMOUNT = "amount"
    CREATED_AT = "createdAt"
    DESCRIPTION = "description"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class ExpenseBase(ApiModel):
    description: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(ge=Decimal("0.01"), max_digits=12, decimal_places=2)
    date: dt.date
    category_id: uuid.UUID
    notes: str | None = Field(default=None, max_length=1000)
    budget_id: uuid.UUID | None = None


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseUpdate(ApiModel):
    description: str | None = Field(default=None, min_length=1, max_length=255)
    amount: Decimal | None = Field(default=None, ge=Decimal("0.01"), max_digits=12, decimal_places=2)
    date: dt.date | None = None
    category_id: uuid.UUID | None = None
    notes: str | None = Field(default=None, max_length=1000)
    budget_id: uuid.UUID | None = None


class Expense(ExpenseBase):
    id: uuid.UUID
    user_id: uuid.UUID
    amount: Money
    category: CategorySummary | None = None
    budget: BudgetSummary | None = None
    created_at: dt.datetime
    updated_at: dt.datetime
    deleted_at: dt.datetime | None = None


class ExpensePage(Page[Expense]):
    has_next: bool
    has_previous: bool


class CategoryBreakdown(ApiModel):
    category_id: uuid.UUID
    category_name: str
    total_amount: Money
    count: int


class DateRange(ApiModel):
    start_date: dt.date
    end_date: dt.date


class ExpenseSummary(ApiModel):
    total_amount: Money
    count: int
    average_amount: Money
    min_amount: Money
    max_amount: Money
    by_category: List[CategoryBreakdown]
    date_range: DateRange | None = None
