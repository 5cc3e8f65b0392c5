# app/services/populate.py
"""
Construiește răspunsurile cu referințe populate (createdBy, category, subcategory...).

Fiecare operație cere alt subset de câmpuri, de aceea apelantul trimite
pentru fiecare referință tuplul de câmpuri dorit; o referință nepopulată
rămâne id simplu. O referință către un rând șters devine null.
Încărcarea este în batch (un SELECT ... IN per tabel), fără N+1.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Type

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.product import Product
from app.models.subcategory import Subcategory
from app.models.user import User
from app.schemas.category import CategoryRead
from app.schemas.common import CategoryRef, SubcategoryRef, UserRef
from app.schemas.product import ProductRead
from app.schemas.subcategory import SubcategoryRead

Fields = Tuple[str, ...]

USER_FULL: Fields = ("name", "email", "role")
USER_BRIEF: Fields = ("name", "role")
NAME_ONLY: Fields = ("name",)
NAME_DESCRIPTION: Fields = ("name", "description")

# referință (atribut pe rândul sursă) -> (model țintă, schema ref)
_REFS: Dict[str, Tuple[Type[Any], Type[Any]]] = {
    "created_by": (User, UserRef),
    "updated_by": (User, UserRef),
    "category_id": (Category, CategoryRef),
    "subcategory_id": (Subcategory, SubcategoryRef),
}


def _load(db: Session, model: Type[Any], ids: Iterable[Optional[str]]) -> Dict[str, Any]:
    wanted = {i for i in ids if i}
    if not wanted:
        return {}
    rows = db.execute(select(model).where(model.id.in_(wanted))).scalars().all()
    return {r.id: r for r in rows}


def _resolve(
    db: Session, objs: Sequence[Any], refs: Mapping[str, Fields]
) -> Dict[str, Dict[str, Any]]:
    """Pentru fiecare referință cerută: {id -> obiect ref populat}."""
    resolved: Dict[str, Dict[str, Any]] = {}
    for attr, fields in refs.items():
        model, ref_cls = _REFS[attr]
        rows = _load(db, model, (getattr(o, attr) for o in objs))
        resolved[attr] = {
            rid: ref_cls(id=row.id, **{f: getattr(row, f) for f in fields})
            for rid, row in rows.items()
        }
    return resolved


def _ref_value(obj: Any, attr: str, resolved: Dict[str, Dict[str, Any]]) -> Any:
    ref_id = getattr(obj, attr)
    if attr not in resolved or ref_id is None:
        return ref_id
    return resolved[attr].get(ref_id)


# -------------------------- Entity builders --------------------------

def categories(
    db: Session, objs: Sequence[Category], **refs: Fields
) -> list[CategoryRead]:
    resolved = _resolve(db, objs, refs)
    return [
        CategoryRead(
            id=o.id,
            name=o.name,
            description=o.description,
            is_active=o.is_active,
            created_by=_ref_value(o, "created_by", resolved),
            updated_by=_ref_value(o, "updated_by", resolved),
            created_at=o.created_at,
            updated_at=o.updated_at,
        )
        for o in objs
    ]


def category(db: Session, obj: Category, **refs: Fields) -> CategoryRead:
    return categories(db, [obj], **refs)[0]


def subcategories(
    db: Session, objs: Sequence[Subcategory], **refs: Fields
) -> list[SubcategoryRead]:
    resolved = _resolve(db, objs, refs)
    return [
        SubcategoryRead(
            id=o.id,
            name=o.name,
            description=o.description,
            category=_ref_value(o, "category_id", resolved),
            created_by=_ref_value(o, "created_by", resolved),
            updated_by=_ref_value(o, "updated_by", resolved),
            created_at=o.created_at,
            updated_at=o.updated_at,
        )
        for o in objs
    ]


def subcategory(db: Session, obj: Subcategory, **refs: Fields) -> SubcategoryRead:
    return subcategories(db, [obj], **refs)[0]


def products(
    db: Session, objs: Sequence[Product], **refs: Fields
) -> list[ProductRead]:
    resolved = _resolve(db, objs, refs)
    return [
        ProductRead(
            id=o.id,
            name=o.name,
            description=o.description,
            price=o.price,
            stock=o.stock,
            category=_ref_value(o, "category_id", resolved),
            subcategory=_ref_value(o, "subcategory_id", resolved),
            images=list(o.images or []),
            created_by=_ref_value(o, "created_by", resolved),
            updated_by=_ref_value(o, "updated_by", resolved),
            created_at=o.created_at,
            updated_at=o.updated_at,
        )
        for o in objs
    ]


def product(db: Session, obj: Product, **refs: Fields) -> ProductRead:
    return products(db, [obj], **refs)[0]


__all__ = [
    "NAME_DESCRIPTION",
    "NAME_ONLY",
    "USER_BRIEF",
    "USER_FULL",
    "categories",
    "category",
    "product",
    "products",
    "subcategories",
    "subcategory",
]
