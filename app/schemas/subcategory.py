# app/schemas/subcategory.py
from __future__ import annotations

from typing import Optional

from pydantic import field_validator

from app.schemas.common import CamelModel, CategoryField, UserField, UtcDatetime, strip_or_none


class SubcategoryCreate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None

    @field_validator("name", "description", "category")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        return strip_or_none(v)


class SubcategoryUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None

    @field_validator("name", "description", "category")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        return strip_or_none(v)


class SubcategoryRead(CamelModel):
    id: str
    name: str
    description: str
    category: CategoryField = None
    created_by: UserField = None
    updated_by: UserField = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None
