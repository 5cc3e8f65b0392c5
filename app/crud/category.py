# app/crud/category.py
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import DuplicateError, NotFoundError
from app.crud.common import commit_or_raise
from app.models.category import Category
from app.services import integrity, validators

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "A category with that name already exists."


# -------------------------- Reads / listing --------------------------

def list_categories(db: Session) -> list[Category]:
    """Toate categoriile, cele mai noi primele (tiebreaker pe id pentru stabilitate)."""
    stmt = select(Category).order_by(Category.created_at.desc(), Category.id.desc())
    return list(db.execute(stmt).scalars().all())


def get(db: Session, category_id: str) -> Optional[Category]:
    return db.get(Category, category_id)


def get_or_raise(db: Session, category_id: Any) -> Category:
    """InvalidIdError pentru id malformat, NotFoundError dacă lipsește."""
    cid = validators.ensure_valid_id(category_id, "category")
    obj = get(db, cid)
    if obj is None:
        raise NotFoundError("category")
    return obj


# -------------------------- Mutations --------------------------

def create(db: Session, data: Mapping[str, Any], creator_id: str) -> Category:
    clean = validators.validate_category_create(data)
    if integrity.category_name_taken(db, clean["name"]):
        raise DuplicateError(DUPLICATE_NAME)

    obj = Category(name=clean["name"], description=clean["description"], created_by=creator_id)
    db.add(obj)
    commit_or_raise(db, duplicate_message=DUPLICATE_NAME, failure_message="Error creating the category")
    db.refresh(obj)
    logger.info("Category created id=%s by=%s", obj.id, creator_id)
    return obj


def update(db: Session, obj: Category, patch: Mapping[str, Any], updater_id: str) -> Category:
    """Update parțial: doar câmpurile prezente; numele se re-verifică excluzând id-ul curent."""
    clean = validators.validate_category_patch(patch)

    if "name" in clean and integrity.category_name_taken(db, clean["name"], exclude_id=obj.id):
        raise DuplicateError(DUPLICATE_NAME)

    for k, v in clean.items():
        setattr(obj, k, v)
    obj.updated_by = updater_id

    commit_or_raise(db, duplicate_message=DUPLICATE_NAME, failure_message="Error updating the category")
    db.refresh(obj)
    logger.info("Category updated id=%s by=%s fields=%s", obj.id, updater_id, sorted(clean))
    return obj


def delete(db: Session, obj: Category) -> Category:
    """Șterge categoria; subcategoriile/produsele dependente rămân neatinse."""
    db.delete(obj)
    commit_or_raise(db, duplicate_message=DUPLICATE_NAME, failure_message="Error deleting the category")
    logger.info("Category deleted id=%s", obj.id)
    return obj
