# app/routers/category.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.security import Identity
from app.crud import category as crud
from app.database import get_db
from app.routers.deps import can_create, can_delete, can_edit, can_view
from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.schemas.common import ApiListResponse, ApiResponse
from app.services import populate

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post(
    "",
    response_model=ApiResponse[CategoryRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create category (admin, coordinador)",
)
def create_category(
    payload: CategoryCreate,
    identity: Identity = Depends(can_create),
    db: Session = Depends(get_db),
):
    obj = crud.create(db, payload.model_dump(exclude_unset=True), identity.id)
    return ApiResponse(message="Category created successfully", data=populate.category(db, obj))


@router.get(
    "",
    response_model=ApiListResponse[CategoryRead],
    response_model_exclude_none=True,
    summary="List categories, newest first (all roles)",
)
def list_categories(
    identity: Identity = Depends(can_view),
    db: Session = Depends(get_db),
):
    items = populate.categories(db, crud.list_categories(db), created_by=populate.USER_FULL)
    return ApiListResponse(count=len(items), data=items)


@router.get(
    "/{category_id}",
    response_model=ApiResponse[CategoryRead],
    response_model_exclude_none=True,
    summary="Get category by id (all roles)",
)
def get_category(
    category_id: str,
    identity: Identity = Depends(can_view),
    db: Session = Depends(get_db),
):
    obj = crud.get_or_raise(db, category_id)
    return ApiResponse(data=populate.category(db, obj, created_by=populate.USER_BRIEF))


@router.put(
    "/{category_id}",
    response_model=ApiResponse[CategoryRead],
    response_model_exclude_none=True,
    summary="Update category (admin, coordinador)",
)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    identity: Identity = Depends(can_edit),
    db: Session = Depends(get_db),
):
    obj = crud.get_or_raise(db, category_id)
    obj = crud.update(db, obj, payload.model_dump(exclude_unset=True), identity.id)
    return ApiResponse(message="Category updated successfully", data=populate.category(db, obj))


@router.delete(
    "/{category_id}",
    response_model=ApiResponse[CategoryRead],
    response_model_exclude_none=True,
    summary="Delete category (admin); dependents are kept",
)
def delete_category(
    category_id: str,
    identity: Identity = Depends(can_delete),
    db: Session = Depends(get_db),
):
    obj = crud.get_or_raise(db, category_id)
    obj = crud.delete(db, obj)
    return ApiResponse(message="Category deleted successfully", data=populate.category(db, obj))
