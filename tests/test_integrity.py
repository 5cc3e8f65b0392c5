# tests/test_integrity.py
from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.errors import NotFoundError
from app.models.category import Category
from app.models.subcategory import Subcategory
from app.services import integrity


class _PgError(Exception):
    pgcode = "23505"


class _MySqlError(Exception):
    pass


@pytest.mark.parametrize(
    "orig, expected",
    [
        (_PgError("duplicate key value violates unique constraint"), True),
        (_MySqlError(1062, "Duplicate entry 'x' for key 'name'"), True),
        (Exception("UNIQUE constraint failed: products.name"), True),
        (Exception("CHECK constraint failed: price_nonnegative"), False),
        (Exception("NOT NULL constraint failed: products.stock"), False),
    ],
)
def test_is_duplicate_key(orig, expected):
    exc = IntegrityError("INSERT ...", {}, orig)
    assert integrity.is_duplicate_key(exc) is expected


def _seed(db):
    cat = Category(name="Beverages", description="d", created_by="a" * 24)
    db.add(cat)
    db.flush()
    sub = Subcategory(name="Sodas", description="d", category_id=cat.id, created_by="a" * 24)
    db.add(sub)
    db.commit()
    return cat, sub


def test_category_name_taken_is_case_insensitive(db):
    cat, _ = _seed(db)
    assert integrity.category_name_taken(db, "BEVERAGES")
    assert not integrity.category_name_taken(db, "beverages", exclude_id=cat.id)


def test_subcategory_name_taken_scope(db):
    cat, sub = _seed(db)
    assert integrity.subcategory_name_taken(db, "sodas")
    assert integrity.subcategory_name_taken(db, "sodas", category_id=cat.id)
    assert not integrity.subcategory_name_taken(db, "sodas", category_id="b" * 24)
    assert not integrity.subcategory_name_taken(db, "sodas", exclude_id=sub.id)


def test_ensure_subcategory_in_category(db):
    cat, sub = _seed(db)
    assert integrity.ensure_subcategory_in_category(db, sub.id, cat.id).id == sub.id
    with pytest.raises(NotFoundError):
        integrity.ensure_subcategory_in_category(db, sub.id, "b" * 24)


def test_ensure_category_exists(db):
    with pytest.raises(NotFoundError) as ei:
        integrity.ensure_category_exists(db, "c" * 24)
    assert ei.value.message == "Category does not exist"


def test_name_lookups_fold_non_ascii(db):
    cat = Category(name="Ñandú", description="d", created_by="a" * 24)
    db.add(cat)
    db.flush()
    db.add(Subcategory(name="Pingüinos", description="d", category_id=cat.id, created_by="a" * 24))
    db.commit()
    assert integrity.category_name_taken(db, "ÑANDÚ")
    assert integrity.subcategory_name_taken(db, "PINGÜINOS", category_id=cat.id)


def test_lower_name_index_rejects_non_ascii_case_variant(db):
    db.add(Category(name="Ñandú", description="d", created_by="a" * 24))
    db.commit()
    db.add(Category(name="ñANDÚ", description="d", created_by="a" * 24))
    with pytest.raises(IntegrityError) as ei:
        db.commit()
    db.rollback()
    assert integrity.is_duplicate_key(ei.value)
