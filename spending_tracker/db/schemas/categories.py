import uuid
from datetime import datetime

from pydantic import Field, field_validator

from .common import ApiModel, HEX_COLOR_PATTERN


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class CategoryBase(ApiModel):
    name: str = Field(min_length=1, max_length=100)
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    icon: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=500)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return _strip(value)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    icon: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=500)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return _strip(value)


class Category(CategoryBase):
    id: uuid.UUID
    is_system: bool
    created_at: datetime
    updated_at: datetime


class CategoryWithCount(Category):
    expense_count: int = 0


class CategorySummary(ApiModel):
    id: uuid.UUID
    name: str
    color: str | None = None
    icon: str | None = None
