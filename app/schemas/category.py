# app/schemas/category.py
from __future__ import annotations

from typing import Optional

from pydantic import ConfigDict, field_validator

from app.schemas.common import CamelModel, UserField, UtcDatetime, strip_or_none


class CategoryCreate(CamelModel):
    """Payload pentru creare categorie; prezența/lungimile se validează în services.validators."""
    name: Optional[str] = None
    description: Optional[str] = None

    # Normalizează (strip) textul; șirurile goale rămân "" și sunt respinse la validare
    @field_validator("name", "description")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        return strip_or_none(v)

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [{"name": "Beverages", "description": "Drinks"}]
        },
    )


class CategoryUpdate(CamelModel):
    """Payload pentru update; toate câmpurile sunt opționale."""
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "description")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        return strip_or_none(v)


class CategoryRead(CamelModel):
    """Răspuns pentru categorie (createdBy poate fi id sau obiect populat)."""
    id: str
    name: str
    description: str
    is_active: bool = True
    created_by: UserField = None
    updated_by: UserField = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None
