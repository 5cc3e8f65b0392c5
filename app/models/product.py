# app/models/product.py
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import JSON, CheckConstraint, Index, Integer, Numeric, String, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import IdMixin, TimestampMixin


class Product(IdMixin, TimestampMixin, Base):
    """
    Produse din catalog.

    Note:
    - `name` UNIQUE global (case-sensitive); verificarea scoped (nume, categorie, subcategorie) e în aplicație.
    - `price` / `stock` nenegative (CHECK la nivel DB).
    - `category_id` / `subcategory_id` fără FK: fără cascade la ștergerea părinților.
    """
    __tablename__ = "products"
    __table_args__ = (
        # index funcțional pentru căutări case-insensitive pe nume
        Index("ix_products_name_lower", func.lower(text("name"))),
        CheckConstraint("price >= 0", name="price_nonnegative"),
        CheckConstraint("stock >= 0", name="stock_nonnegative"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False)
    category_id: Mapped[str] = mapped_column(String(24), nullable=False, index=True)
    subcategory_id: Mapped[str] = mapped_column(String(24), nullable=False, index=True)
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    created_by: Mapped[Optional[str]] = mapped_column(String(24), nullable=True)
    updated_by: Mapped[Optional[str]] = mapped_column(String(24), nullable=True)

    def __repr__(self) -> str:
        name_preview = (self.name[:32] + "…") if self.name and len(self.name) > 33 else self.name
        return f"<Product id={self.id!r} name={name_preview!r}>"
