"""
API dependency helpers.

Resolves the current user from proxy headers (or DEV_MODE) and loads
owner-scoped resources for routes.
"""
import uuid
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from spending_tracker.api.auth import Identity, get_or_create_user, identity_from_headers
from spending_tracker.db import models
from spending_tracker.db.database import get_db
from spending_tracker.db.repositories import budgets as budget_repo
from spending_tracker.utils.runtime import DEV_USER_EMAIL, DEV_USER_NAME, dev_mode_active


def get_current_user(
    db: Session = Depends(get_db),
    x_auth_request_user: Optional[str] = Header(default=None),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> models.User:
    """Return the authenticated user, creating the row on first sight.

    Raises 401 if no identity can be resolved.
    """
    if dev_mode_active():
        identity = Identity(email=DEV_USER_EMAIL, name=DEV_USER_NAME)
    else:
        identity = identity_from_headers(
            x_auth_request_user, x_auth_request_email, x_forwarded_user, x_forwarded_email
        )
        if identity is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return get_or_create_user(db, identity)


def get_owned_budget(
    budget_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
) -> models.Budget:
    """Load a live budget and make sure it belongs to the caller."""
    budget = budget_repo.get_budget(db, budget_id)
    if budget is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Budget with ID {budget_id} not found")
    if budget.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to access this budget",
        )
    return budget
