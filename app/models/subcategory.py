# app/models/subcategory.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import IdMixin, TimestampMixin


class Subcategory(IdMixin, TimestampMixin, Base):
    """
    Tabelul 'subcategories'.
    - `name` UNIQUE global, case-sensitive (verificarea scoped pe categorie se face în aplicație).
    - `category_id` fără FK: ștergerea categoriei nu atinge subcategoriile.
    """
    __tablename__ = "subcategories"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category_id: Mapped[str] = mapped_column(String(24), nullable=False, index=True)
    created_by: Mapped[Optional[str]] = mapped_column(String(24), nullable=True)
    updated_by: Mapped[Optional[str]] = mapped_column(String(24), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Subcategory id={self.id!r} name={self.name!r} category_id={self.category_id!r}>"
