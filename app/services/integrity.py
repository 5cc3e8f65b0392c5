# app/services/integrity.py
"""
Reguli de integritate referențială și de unicitate între categorii,
subcategorii și produse.

Verificările sunt read-then-decide, fără lock-uri: indexurile unice din DB
rămân arbitrul final, iar semnalul de duplicate-key de la scriere este
reclasificat în DuplicateError de către crud (vezi `is_duplicate_key`).
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.category import Category
from app.models.product import Product
from app.models.subcategory import Subcategory

# SQLSTATE / coduri native pentru încălcarea unui index unic
_PG_UNIQUE_VIOLATION = "23505"
_MYSQL_DUP_ENTRY = 1062


def is_duplicate_key(exc: IntegrityError) -> bool:
    """True dacă IntegrityError provine dintr-un index/constrângere UNIQUE."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == _PG_UNIQUE_VIOLATION:
        return True
    args = getattr(orig, "args", ()) or ()
    if args and args[0] == _MYSQL_DUP_ENTRY:
        return True
    msg = str(orig if orig is not None else exc)
    return "UNIQUE constraint failed" in msg or "duplicate key" in msg.lower()


# -------------------------- Referential --------------------------

def ensure_category_exists(db: Session, category_id: str) -> Category:
    obj = db.get(Category, category_id)
    if obj is None:
        raise NotFoundError("category", "Category does not exist")
    return obj


def ensure_subcategory_in_category(db: Session, subcategory_id: str, category_id: str) -> Subcategory:
    """
    Subcategoria trebuie să existe ȘI să aparțină categoriei.
    Ambele cazuri ies ca un singur NotFound("subcategory").
    """
    stmt = select(Subcategory).where(
        Subcategory.id == subcategory_id,
        Subcategory.category_id == category_id,
    )
    obj = db.execute(stmt).scalar_one_or_none()
    if obj is None:
        raise NotFoundError(
            "subcategory",
            "Subcategory does not exist or does not belong to the specified category",
        )
    return obj


# -------------------------- Uniqueness (pre-check) --------------------------

def category_name_taken(db: Session, name: str, *, exclude_id: Optional[str] = None) -> bool:
    """Exploatează ix_categories_name_lower."""
    stmt = select(Category.id).where(func.lower(Category.name) == func.lower(name))
    if exclude_id is not None:
        stmt = stmt.where(Category.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


def subcategory_name_taken(
    db: Session,
    name: str,
    *,
    category_id: Optional[str] = None,
    exclude_id: Optional[str] = None,
) -> bool:
    """Case-insensitive; limitat la categorie doar când category_id e dat."""
    stmt = select(Subcategory.id).where(func.lower(Subcategory.name) == func.lower(name))
    if category_id is not None:
        stmt = stmt.where(Subcategory.category_id == category_id)
    if exclude_id is not None:
        stmt = stmt.where(Subcategory.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


def product_name_taken(
    db: Session,
    name: str,
    *,
    category_id: Optional[str] = None,
    subcategory_id: Optional[str] = None,
    exclude_id: Optional[str] = None,
) -> bool:
    """Case-insensitive; fiecare câmp de scope se aplică doar dacă e dat."""
    stmt = select(Product.id).where(func.lower(Product.name) == func.lower(name))
    if category_id is not None:
        stmt = stmt.where(Product.category_id == category_id)
    if subcategory_id is not None:
        stmt = stmt.where(Product.subcategory_id == subcategory_id)
    if exclude_id is not None:
        stmt = stmt.where(Product.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


__all__ = [
    "category_name_taken",
    "ensure_category_exists",
    "ensure_subcategory_in_category",
    "is_duplicate_key",
    "product_name_taken",
    "subcategory_name_taken",
]
