import uuid
from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Expense(TimestampMixin, Base):
    __tablename__ = 'expenses'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False)
    category_id = Column(UUID(as_uuid=True), ForeignKey('categories.id', ondelete='RESTRICT'), nullable=False)
    budget_id = Column(UUID(as_uuid=True), ForeignKey('budgets.id', ondelete='SET NULL'), nullable=True)
    notes = Column(Text, nullable=True)

    category = relationship("Category", back_populates="expenses")
    budget = relationship("Budget")

    __table_args__ = (
        Index('ix_expenses_user_id_date', 'user_id', 'date'),
        Index('ix_expenses_user_id_category_id', 'user_id', 'category_id'),
        Index('ix_expenses_budget_id', 'budget_id'),
        CheckConstraint('amount > 0', name='ck_expenses_amount_positive'),
    )
