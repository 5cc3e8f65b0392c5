"""Catalog baseline: users, categories, subcategories, products.

Revision ID: 0001_catalog_baseline
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""
from __future__ import annotations

import os
from typing import Optional, Sequence, Union

import sqlalchemy as sa
from alembic import op

# --- Alembic identifiers ---
revision: str = "0001_catalog_baseline"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _schema() -> Optional[str]:
    bind = op.get_bind()
    if bind.dialect.name == "sqlite":
        return None
    return (os.getenv("DB_SCHEMA") or "app").strip() or None


def _qi(ident: str) -> str:
    return '"' + ident.replace('"', '""') + '"'


def _id_col() -> sa.Column:
    return sa.Column("id", sa.String(length=24), nullable=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    schema = _schema()
    if schema and op.get_bind().dialect.name == "postgresql":
        op.execute(f"CREATE SCHEMA IF NOT EXISTS {_qi(schema)};")

    # --- users (citit doar la populate) ---
    op.create_table(
        "users",
        _id_col(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("role IN ('admin', 'coordinador', 'auxiliar')", name="ck_users_role_allowed"),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        schema=schema,
    )
    op.create_index("ix_users_created_at", "users", ["created_at"], schema=schema)

    # --- categories: UNIQUE pe lower(name) ---
    op.create_table(
        "categories",
        _id_col(),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.String(length=200), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.String(length=24), nullable=False),
        sa.Column("updated_by", sa.String(length=24), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        schema=schema,
    )
    op.create_index("ix_categories_created_at", "categories", ["created_at"], schema=schema)
    op.create_index(
        "ix_categories_name_lower", "categories", [sa.text("lower(name)")], unique=True, schema=schema
    )

    # --- subcategories: UNIQUE global pe name; fără FK către categories ---
    op.create_table(
        "subcategories",
        _id_col(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category_id", sa.String(length=24), nullable=False),
        sa.Column("created_by", sa.String(length=24), nullable=True),
        sa.Column("updated_by", sa.String(length=24), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_subcategories"),
        sa.UniqueConstraint("name", name="uq_subcategories_name"),
        schema=schema,
    )
    op.create_index("ix_subcategories_category_id", "subcategories", ["category_id"], schema=schema)
    op.create_index("ix_subcategories_created_at", "subcategories", ["created_at"], schema=schema)

    # --- products ---
    op.create_table(
        "products",
        _id_col(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.String(length=24), nullable=False),
        sa.Column("subcategory_id", sa.String(length=24), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("created_by", sa.String(length=24), nullable=True),
        sa.Column("updated_by", sa.String(length=24), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("price >= 0", name="ck_products_price_nonnegative"),
        sa.CheckConstraint("stock >= 0", name="ck_products_stock_nonnegative"),
        sa.PrimaryKeyConstraint("id", name="pk_products"),
        sa.UniqueConstraint("name", name="uq_products_name"),
        schema=schema,
    )
    op.create_index("ix_products_category_id", "products", ["category_id"], schema=schema)
    op.create_index("ix_products_subcategory_id", "products", ["subcategory_id"], schema=schema)
    op.create_index("ix_products_created_at", "products", ["created_at"], schema=schema)
    op.create_index("ix_products_name_lower", "products", [sa.text("lower(name)")], schema=schema)


def downgrade() -> None:
    schema = _schema()
    for table in ("products", "subcategories", "categories", "users"):
        op.drop_table(table, schema=schema)
