# app/schemas/common.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Generic, List, Optional, TypeVar, Union

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """JSON camelCase pe fir (createdBy, isActive...), snake_case în Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserRef(CamelModel):
    """Subset populat din utilizator; câmpurile neselectate rămân None (omise în răspuns)."""
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class CategoryRef(CamelModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None


class SubcategoryRef(CamelModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None


# Referință: fie id-ul simplu, fie obiectul populat
UserField = Optional[Union[UserRef, str]]
CategoryField = Optional[Union[CategoryRef, str]]
SubcategoryField = Optional[Union[SubcategoryRef, str]]


class ApiResponse(CamelModel, Generic[T]):
    """Plic unitar: {success, message?, data?, count?, error?}."""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    count: Optional[int] = None
    error: Optional[str] = None


class ApiListResponse(CamelModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: List[T] = []
    count: int = 0


def _as_utc(v: datetime) -> datetime:
    # SQLite întoarce DateTime fără offset; valorile sunt scrise mereu în UTC
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


# Timestamp de răspuns, mereu cu offset UTC explicit
UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


def strip_or_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    return v.strip()
