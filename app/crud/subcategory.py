# app/crud/subcategory.py
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import DuplicateError, NotFoundError
from app.crud.common import commit_or_raise
from app.models.subcategory import Subcategory
from app.services import integrity, validators

logger = logging.getLogger(__name__)

DUPLICATE_IN_CATEGORY = "A subcategory with that name already exists in this category."
DUPLICATE_NAME = "The subcategory already exists."


def list_subcategories(db: Session) -> list[Subcategory]:
    stmt = select(Subcategory).order_by(Subcategory.created_at.desc(), Subcategory.id.desc())
    return list(db.execute(stmt).scalars().all())


def get(db: Session, subcategory_id: str) -> Optional[Subcategory]:
    return db.get(Subcategory, subcategory_id)


def get_or_raise(db: Session, subcategory_id: Any) -> Subcategory:
    sid = validators.ensure_valid_id(subcategory_id, "subcategory")
    obj = get(db, sid)
    if obj is None:
        raise NotFoundError("subcategory")
    return obj


def create(db: Session, data: Mapping[str, Any], creator_id: str) -> Subcategory:
    """
    Pre-check-ul de duplicat este limitat la categoria părinte (case-insensitive),
    dar indexul UNIQUE din DB este global și case-sensitive: ambele straturi rămân.
    """
    clean = validators.validate_subcategory_create(data)
    integrity.ensure_category_exists(db, clean["category_id"])

    if integrity.subcategory_name_taken(db, clean["name"], category_id=clean["category_id"]):
        raise DuplicateError(DUPLICATE_IN_CATEGORY)

    obj = Subcategory(
        name=clean["name"],
        description=clean["description"],
        category_id=clean["category_id"],
        created_by=creator_id,
    )
    db.add(obj)
    commit_or_raise(db, duplicate_message=DUPLICATE_NAME, failure_message="Error creating the subcategory")
    db.refresh(obj)
    logger.info("Subcategory created id=%s category=%s by=%s", obj.id, obj.category_id, creator_id)
    return obj


def update(db: Session, obj: Subcategory, patch: Mapping[str, Any], updater_id: str) -> Subcategory:
    """
    Verificarea de duplicat la update folosește categoria din patch (dacă e dată),
    NU categoria curentă a subcategoriei; fără categorie în patch, verificarea e globală.
    """
    clean = validators.validate_subcategory_patch(patch)

    if "name" in clean and integrity.subcategory_name_taken(
        db,
        clean["name"],
        category_id=clean.get("category_id"),
        exclude_id=obj.id,
    ):
        raise DuplicateError(DUPLICATE_IN_CATEGORY)

    if "category_id" in clean:
        integrity.ensure_category_exists(db, clean["category_id"])

    for k, v in clean.items():
        setattr(obj, k, v)
    obj.updated_by = updater_id

    commit_or_raise(db, duplicate_message=DUPLICATE_NAME, failure_message="Error updating the subcategory")
    db.refresh(obj)
    logger.info("Subcategory updated id=%s by=%s fields=%s", obj.id, updater_id, sorted(clean))
    return obj


def delete(db: Session, obj: Subcategory) -> Subcategory:
    """Fără cascade către produse."""
    db.delete(obj)
    commit_or_raise(db, duplicate_message=DUPLICATE_NAME, failure_message="Error deleting the subcategory")
    logger.info("Subcategory deleted id=%s", obj.id)
    return obj
