# app/schemas/product.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from pydantic import ConfigDict, field_serializer, field_validator

from app.schemas.common import (
    CamelModel,
    CategoryField,
    SubcategoryField,
    UserField,
    UtcDatetime,
    strip_or_none,
)


def _quantize_price(v: Decimal) -> Decimal:
    # Aliniază la NUMERIC(12,2) și evită erori de reprezentare
    return v.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class _ProductPayload(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    images: Optional[List[str]] = None

    @field_validator("name", "description", "category", "subcategory")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        return strip_or_none(v)

    @field_validator("price")
    @classmethod
    def _price_quantize(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is None:
            return v
        return _quantize_price(v)

    @field_validator("images")
    @classmethod
    def _images_clean(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [s.strip() for s in v if s and s.strip()]


class ProductCreate(_ProductPayload):
    """Payload pentru creare produs; regulile (preț > 0, stoc >= 0...) sunt în services.validators."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Cola 2L",
                    "description": "Sparkling soft drink",
                    "price": 2.5,
                    "stock": 40,
                    "category": "65f1c0a2e4b0a1b2c3d4e5f6",
                    "subcategory": "65f1c0a2e4b0a1b2c3d4e5f7",
                    "images": ["https://cdn.example.com/cola.png"],
                }
            ]
        }
    )


class ProductUpdate(_ProductPayload):
    """Payload pentru update parțial; toate câmpurile sunt opționale."""
    pass


class ProductRead(CamelModel):
    id: str
    name: str
    description: str
    price: Decimal
    stock: int
    category: CategoryField = None
    subcategory: SubcategoryField = None
    images: List[str] = []
    created_by: UserField = None
    updated_by: UserField = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None

    # număr JSON, nu string (Decimal se serializează implicit ca "12.50")
    @field_serializer("price")
    def _price_as_number(self, v: Decimal) -> float:
        return float(v)
