"""
Caller identity.

Requests arrive behind oauth2-proxy, which forwards the signed-in user as
``X-Auth-Request-*`` (or ``X-Forwarded-*``) headers. The first request from
an email creates its user row.
"""
import logging
import os
from dataclasses import dataclass
from typing import FrozenSet, Optional

from sqlalchemy.orm import Session

from spending_tracker.db import models
from spending_tracker.db.repositories import users as user_repo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    email: str
    name: Optional[str] = None


def admin_emails() -> FrozenSet[str]:
    raw = os.getenv("ADMIN_EMAILS", "")
    return frozenset(e.strip().strip("'\"").lower() for e in raw.split(",") if e.strip().strip("'\""))


def identity_from_headers(
    auth_user: Optional[str] = None,
    auth_email: Optional[str] = None,
    forwarded_user: Optional[str] = None,
    forwarded_email: Optional[str] = None,
) -> Optional[Identity]:
    """Prefer the X-Auth-Request pair; None when no email was forwarded."""
    email = (auth_email or forwarded_email or "").strip().lower()
    if not email:
        return None
    return Identity(email=email, name=auth_user or forwarded_user)


def get_or_create_user(db: Session, identity: Identity) -> models.User:
    role = "admin" if identity.email in admin_emails() else "user"
    user = user_repo.get_user_by_email(db, identity.email)
    if user is None:
        user = user_repo.create_user(db, email=identity.email, display_name=identity.name, role=role)
        logger.info("user_created: email=%s role=%s", user.email, user.role)
        return user
    if role == "admin" and user.role != "admin":
        user.role = "admin"
        db.commit()
        db.refresh(user)
        logger.info("user_promoted: email=%s", user.email)
    return user
