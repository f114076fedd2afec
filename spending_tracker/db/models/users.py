import uuid
from sqlalchemy import Column, String
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = 'users'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True, index=True)
    display_name = Column(String(255), nullable=True)
    # 'user' | 'admin'
    role = Column(String(20), nullable=False, default='user')
