"""
User repository functions.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from spending_tracker.db import models


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def create_user(db: Session, email: str, display_name: Optional[str] = None, role: str = 'user') -> models.User:
    user = models.User(email=email, display_name=display_name or email.split("@")[0], role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
