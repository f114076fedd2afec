import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from spending_tracker.db.models import BudgetPeriod

from .common import ApiModel, Money, Page


class BudgetCategory(ApiModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    color: str | None = None
    icon: str | None = None


class BudgetBase(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    amount: Decimal = Field(ge=Decimal("0.01"), max_digits=12, decimal_places=2)
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    start_date: date
    end_date: date
    category_id: uuid.UUID | None = None
    is_active: bool = True
    alert_enabled: bool = True
    alert_threshold: int = Field(default=80, ge=0, le=100)


class BudgetCreate(BudgetBase):
    pass


class BudgetUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    amount: Decimal | None = Field(default=None, ge=Decimal("0.01"), max_digits=12, decimal_places=2)
    period: BudgetPeriod | None = None
    start_date: date | None = None
    end_date: date | None = None
    category_id: uuid.UUID | None = None
    is_active: bool | None = None
    alert_enabled: bool | None = None
    alert_threshold: int | None = Field(default=None, ge=0, le=100)


class Budget(BudgetBase):
    id: uuid.UUID
    user_id: uuid.UUID
    amount: Money
    spent_amount: Money
    category: BudgetCategory | None = None
    created_at: datetime
    updated_at: datetime


class BudgetSummary(ApiModel):
    id: uuid.UUID
    name: str
    amount: Money
    period: BudgetPeriod


class BudgetPage(Page[Budget]):
    pass
