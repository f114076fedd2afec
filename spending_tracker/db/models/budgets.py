import enum
import uuid
from sqlalchemy import Boolean, Column, Date, Enum, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class BudgetPeriod(str, enum.Enum):
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    QUARTERLY = 'quarterly'
    YEARLY = 'yearly'


class BudgetCategory(TimestampMixin, Base):
    __tablename__ = 'budget_categories'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=True)
    icon = Column(String(50), nullable=True)


class Budget(TimestampMixin, Base):
    __tablename__ = 'budgets'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    period = Column(
        Enum(BudgetPeriod, name='budget_period', values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BudgetPeriod.MONTHLY,
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    category_id = Column(UUID(as_uuid=True), ForeignKey('budget_categories.id', ondelete='SET NULL'), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    alert_enabled = Column(Boolean, nullable=False, default=True)
    alert_threshold = Column(Integer, nullable=False, default=80)
    spent_amount = Column(Numeric(12, 2), nullable=False, default=0)

    category = relationship("BudgetCategory")
    user = relationship("User")

    __table_args__ = (
        Index('ix_budgets_user_id_start_date_end_date', 'user_id', 'start_date', 'end_date'),
        Index('ix_budgets_user_id_category_id', 'user_id', 'category_id'),
    )
