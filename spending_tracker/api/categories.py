"""
Category API endpoints.

Reads are public; writes require an authenticated user. System categories
are read-only and deletes are soft.
"""
import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from spending_tracker.api.deps import get_current_user
from spending_tracker.db import models, schemas
from spending_tracker.db.database import get_db
from spending_tracker.db.repositories import categories as category_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


def _get_category_or_404(db: Session, category_id: uuid.UUID) -> models.Category:
    category = category_repo.get_category(db, category_id)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f'Category with ID "{category_id}" not found')
    return category


def _ensure_name_available(db: Session, name: str, exclude_id: uuid.UUID = None) -> None:
    if category_repo.get_category_by_name(db, name, exclude_id=exclude_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f'Category with name "{name}" already exists')


@router.post("", response_model=schemas.Category, status_code=status.HTTP_201_CREATED)
def create_category_endpoint(
    category: schemas.CategoryCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    _ensure_name_available(db, category.name)
    try:
        created = category_repo.create_category(db, category)
    except IntegrityError:
        db.rollback()
        logger.warning("category_create_integrity_error: name=%s", category.name)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f'Category with name "{category.name}" already exists',
        )
    logger.info("category_created: id=%s name=%s by=%s", created.id, created.name, user.email)
    return created


@router.get("", response_model=List[schemas.CategoryWithCount])
def list_categories_endpoint(db: Session = Depends(get_db)):
    rows = category_repo.list_categories_with_counts(db)
    return [
        schemas.CategoryWithCount.model_validate(category).model_copy(update={"expense_count": count})
        for category, count in rows
    ]


@router.get("/{category_id}", response_model=schemas.Category)
def get_category_endpoint(category_id: uuid.UUID, db: Session = Depends(get_db)):
    return _get_category_or_404(db, category_id)


@router.patch("/{category_id}", response_model=schemas.Category)
def update_category_endpoint(
    category_id: uuid.UUID,
    category: schemas.CategoryUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    db_category = _get_category_or_404(db, category_id)
    if db_category.is_system:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="System categories cannot be modified")
    changes = category.model_dump(exclude_unset=True)
    # Explicit nulls only clear optional columns.
    if "name" in changes and changes["name"] is None:
        del changes["name"]
    if "name" in changes and changes["name"] != db_category.name:
        _ensure_name_available(db, changes["name"], exclude_id=db_category.id)
    try:
        updated = category_repo.update_category(db, db_category, changes)
    except IntegrityError:
        db.rollback()
        logger.warning("category_update_integrity_error: id=%s", category_id)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f'Category with name "{changes.get("name")}" already exists',
        )
    logger.info("category_updated: id=%s by=%s", updated.id, user.email)
    return updated


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category_endpoint(
    category_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    db_category = _get_category_or_404(db, category_id)
    if db_category.is_system:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="System categories cannot be deleted")
    expense_count = category_repo.count_active_expenses(db, db_category.id)
    if expense_count > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f'Cannot delete category "{db_category.name}" because it has '
                f"{expense_count} associated expense(s)."
            ),
        )
    category_repo.soft_delete_category(db, db_category)
    logger.info("category_deleted: id=%s by=%s", category_id, user.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
