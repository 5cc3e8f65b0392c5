# app/models/category.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Index, String, func, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import IdMixin, TimestampMixin


class Category(IdMixin, TimestampMixin, Base):
    """
    Tabelul 'categories'.
    - Unicitate case-insensitive pe nume via index funcțional: UNIQUE ON lower(name).
    - created_by / updated_by sunt referințe slabe (doar id), fără FK.
    """
    __tablename__ = "categories"
    __table_args__ = (
        Index("ix_categories_name_lower", func.lower(text("name")), unique=True),
    )

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[str] = mapped_column(String(24), nullable=False)
    updated_by: Mapped[Optional[str]] = mapped_column(String(24), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover
        name_preview = (self.name[:32] + "…") if self.name and len(self.name) > 33 else self.name
        return f"<Category id={self.id!r} name={name_preview!r}>"
