import uuid
from sqlalchemy import Boolean, Column, Index, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Category(TimestampMixin, Base):
    """Expense category. System categories are seeded and read-only."""
    __tablename__ = 'categories'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    color = Column(String(7), nullable=True)
    icon = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    is_system = Column(Boolean, nullable=False, default=False)

    expenses = relationship("Expense", back_populates="category")

    __table_args__ = (
        Index(
            'uq_categories_name_active',
            'name',
            unique=True,
            postgresql_where=text('deleted_at IS NULL'),
            sqlite_where=text('deleted_at IS NULL'),
        ),
    )
