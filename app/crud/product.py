# app/crud/product.py
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import DuplicateError, NotFoundError
from app.crud.common import commit_or_raise
from app.models.product import Product
from app.services import integrity, validators

logger = logging.getLogger(__name__)

DUPLICATE_IN_SCOPE = "A product with that name already exists in this category and subcategory."
DUPLICATE_NAME = "A product with that name already exists."


def list_products(db: Session) -> list[Product]:
    """Toate produsele, cele mai noi primele."""
    stmt = select(Product).order_by(Product.created_at.desc(), Product.id.desc())
    return list(db.execute(stmt).scalars().all())


def get(db: Session, product_id: str) -> Optional[Product]:
    """Returnează produsul după ID (sau None)."""
    return db.get(Product, product_id)


def get_or_raise(db: Session, product_id: Any) -> Product:
    pid = validators.ensure_valid_id(product_id, "product")
    obj = get(db, pid)
    if obj is None:
        raise NotFoundError("product")
    return obj


def create(db: Session, data: Mapping[str, Any], creator_id: str) -> Product:
    """
    Ordine: câmpuri -> categoria există -> subcategoria aparține categoriei ->
    duplicat pe (nume ci, categorie, subcategorie) -> insert.
    Indexul UNIQUE pe `name` (global) prinde cursele și numele din alt scope.
    """
    clean = validators.validate_product_create(data)
    integrity.ensure_category_exists(db, clean["category_id"])
    integrity.ensure_subcategory_in_category(db, clean["subcategory_id"], clean["category_id"])

    if integrity.product_name_taken(
        db,
        clean["name"],
        category_id=clean["category_id"],
        subcategory_id=clean["subcategory_id"],
    ):
        raise DuplicateError(DUPLICATE_IN_SCOPE)

    obj = Product(**clean, created_by=creator_id)
    db.add(obj)
    commit_or_raise(db, duplicate_message=DUPLICATE_NAME, failure_message="Error creating the product")
    db.refresh(obj)
    logger.info(
        "Product created id=%s category=%s subcategory=%s by=%s",
        obj.id, obj.category_id, obj.subcategory_id, creator_id,
    )
    return obj


def update(db: Session, obj: Product, patch: Mapping[str, Any], updater_id: str) -> Product:
    """
    Actualizează doar câmpurile **furnizate**.

    - Duplicatul de nume se verifică în scope-ul (categorie, subcategorie) din patch;
      câmpurile absente din patch nu restrâng căutarea (mai lax decât la creare).
    - Categoria din patch trebuie să existe.
    - Perechea (categorie, subcategorie) rezultată se re-validează ori de câte ori una
      dintre ele apare în patch: (categoria din patch sau cea curentă, subcategoria din
      patch sau cea curentă). Intenționat mai strict decât simpla verificare că
      noua categorie există: altfel produsul ar rămâne sub o subcategorie a altei categorii.
    """
    clean = validators.validate_product_patch(patch)

    if "name" in clean and integrity.product_name_taken(
        db,
        clean["name"],
        category_id=clean.get("category_id"),
        subcategory_id=clean.get("subcategory_id"),
        exclude_id=obj.id,
    ):
        raise DuplicateError(DUPLICATE_IN_SCOPE)

    if "category_id" in clean:
        integrity.ensure_category_exists(db, clean["category_id"])
    if "category_id" in clean or "subcategory_id" in clean:
        parent_id = clean.get("category_id", obj.category_id)
        sub_id = clean.get("subcategory_id", obj.subcategory_id)
        integrity.ensure_subcategory_in_category(db, sub_id, parent_id)

    for k, v in clean.items():
        setattr(obj, k, v)
    obj.updated_by = updater_id

    commit_or_raise(db, duplicate_message=DUPLICATE_NAME, failure_message="Error updating the product")
    db.refresh(obj)
    logger.info("Product updated id=%s by=%s fields=%s", obj.id, updater_id, sorted(clean))
    return obj


def delete(db: Session, obj: Product) -> Product:
    """Șterge un produs existent."""
    db.delete(obj)
    commit_or_raise(db, duplicate_message=DUPLICATE_NAME, failure_message="Error deleting the product")
    logger.info("Product deleted id=%s", obj.id)
    return obj
