# app/models/mixins.py
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.ids import new_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdMixin:
    """Id de 24 caractere hex, generat în aplicație (nu de DB)."""
    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_id)


class TimestampMixin:
    """created_at / updated_at setate din aplicație (precizie la microsecundă pentru sortare)."""
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
