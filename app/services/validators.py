# app/services/validators.py
"""
Validări de câmp per entitate (prezență, lungimi, valori numerice).

Rulează după gate-urile de autentificare/autorizare și înainte de orice
verificare în DB. Toate eșecurile ridică ValidationError (400), cu excepția
id-urilor malformate, care ridică InvalidIdError (400).
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional

from app.core.errors import InvalidIdError, ValidationError
from app.core.ids import is_valid_id, normalize_id

CATEGORY_NAME_MIN = 3
CATEGORY_NAME_MAX = 50
CATEGORY_DESCRIPTION_MAX = 200


def has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def require_text(value: Optional[str], message: str) -> str:
    if not has_text(value):
        raise ValidationError(message)
    return value.strip()  # type: ignore[union-attr]


def ensure_valid_id(value: Any, entity: str) -> str:
    if not is_valid_id(value):
        raise InvalidIdError(entity)
    return normalize_id(value)


# -------------------------- Category --------------------------

def _check_category_name(name: str) -> None:
    if not CATEGORY_NAME_MIN <= len(name) <= CATEGORY_NAME_MAX:
        raise ValidationError(
            f"Category name must be between {CATEGORY_NAME_MIN} and {CATEGORY_NAME_MAX} characters."
        )


def _check_category_description(description: str) -> None:
    if len(description) > CATEGORY_DESCRIPTION_MAX:
        raise ValidationError(
            f"Description cannot exceed {CATEGORY_DESCRIPTION_MAX} characters."
        )


def validate_category_create(data: Mapping[str, Any]) -> dict:
    name = require_text(data.get("name"), "Category name is required.")
    description = require_text(data.get("description"), "Description is required.")
    _check_category_name(name)
    _check_category_description(description)
    return {"name": name, "description": description}


def validate_category_patch(patch: Mapping[str, Any]) -> dict:
    """Păstrează doar câmpurile aplicabile; textul gol e ignorat (nu șterge valoarea)."""
    clean: dict = {}
    if has_text(patch.get("name")):
        clean["name"] = patch["name"].strip()
        _check_category_name(clean["name"])
    if has_text(patch.get("description")):
        clean["description"] = patch["description"].strip()
        _check_category_description(clean["description"])
    if patch.get("is_active") is not None:
        clean["is_active"] = bool(patch["is_active"])
    return clean


# -------------------------- Subcategory --------------------------

def validate_subcategory_create(data: Mapping[str, Any]) -> dict:
    name = require_text(data.get("name"), "Subcategory name is required.")
    description = require_text(data.get("description"), "Description is required.")
    category = require_text(data.get("category"), "Parent category is required.")
    return {
        "name": name,
        "description": description,
        "category_id": ensure_valid_id(category, "category"),
    }


def validate_subcategory_patch(patch: Mapping[str, Any]) -> dict:
    clean: dict = {}
    if has_text(patch.get("name")):
        clean["name"] = patch["name"].strip()
    if has_text(patch.get("description")):
        clean["description"] = patch["description"].strip()
    if has_text(patch.get("category")):
        clean["category_id"] = ensure_valid_id(patch["category"].strip(), "category")
    return clean


# -------------------------- Product --------------------------

def _check_price(price: Decimal, *, strictly_positive: bool) -> None:
    if strictly_positive and price <= 0:
        raise ValidationError("Price must be greater than zero.")
    if price < 0:
        raise ValidationError("Price cannot be negative.")


def _check_stock(stock: Any) -> None:
    if isinstance(stock, bool) or not isinstance(stock, int):
        raise ValidationError("Stock must be an integer.")
    if stock < 0:
        raise ValidationError("Stock cannot be negative.")


def validate_product_create(data: Mapping[str, Any]) -> dict:
    name = require_text(data.get("name"), "Product name is required.")
    description = require_text(data.get("description"), "Description is required.")

    price = data.get("price")
    if price is None:
        raise ValidationError("Price must be greater than zero.")
    _check_price(Decimal(price), strictly_positive=True)

    stock = data.get("stock")
    if stock is None:
        raise ValidationError("Stock is required.")
    _check_stock(stock)

    category = require_text(data.get("category"), "Category is required.")
    subcategory = require_text(data.get("subcategory"), "Subcategory is required.")

    return {
        "name": name,
        "description": description,
        "price": Decimal(price),
        "stock": stock,
        "category_id": ensure_valid_id(category, "category"),
        "subcategory_id": ensure_valid_id(subcategory, "subcategory"),
        "images": list(data.get("images") or []),
    }


def validate_product_patch(patch: Mapping[str, Any]) -> dict:
    clean: dict = {}
    if has_text(patch.get("name")):
        clean["name"] = patch["name"].strip()
    if has_text(patch.get("description")):
        clean["description"] = patch["description"].strip()
    if patch.get("price") is not None:
        _check_price(Decimal(patch["price"]), strictly_positive=False)
        clean["price"] = Decimal(patch["price"])
    if patch.get("stock") is not None:
        _check_stock(patch["stock"])
        clean["stock"] = patch["stock"]
    if has_text(patch.get("category")):
        clean["category_id"] = ensure_valid_id(patch["category"].strip(), "category")
    if has_text(patch.get("subcategory")):
        clean["subcategory_id"] = ensure_valid_id(patch["subcategory"].strip(), "subcategory")
    if patch.get("images") is not None:
        clean["images"] = list(patch["images"])
    return clean


__all__ = [
    "CATEGORY_DESCRIPTION_MAX",
    "CATEGORY_NAME_MAX",
    "CATEGORY_NAME_MIN",
    "ensure_valid_id",
    "has_text",
    "require_text",
    "validate_category_create",
    "validate_category_patch",
    "validate_product_create",
    "validate_product_patch",
    "validate_subcategory_create",
    "validate_subcategory_patch",
]
