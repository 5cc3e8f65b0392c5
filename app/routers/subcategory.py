# app/routers/subcategory.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.security import Identity
from app.crud import subcategory as crud
from app.database import get_db
from app.routers.deps import can_create, can_delete, can_edit, can_view
from app.schemas.common import ApiListResponse, ApiResponse
from app.schemas.subcategory import SubcategoryCreate, SubcategoryRead, SubcategoryUpdate
from app.services import populate

router = APIRouter(prefix="/subcategories", tags=["subcategories"])


@router.post(
    "",
    response_model=ApiResponse[SubcategoryRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create subcategory (admin, coordinador)",
)
def create_subcategory(
    payload: SubcategoryCreate,
    identity: Identity = Depends(can_create),
    db: Session = Depends(get_db),
):
    obj = crud.create(db, payload.model_dump(exclude_unset=True), identity.id)
    return ApiResponse(message="Subcategory created successfully", data=populate.subcategory(db, obj))


@router.get(
    "",
    response_model=ApiListResponse[SubcategoryRead],
    response_model_exclude_none=True,
    summary="List subcategories, newest first (all roles)",
)
def list_subcategories(
    identity: Identity = Depends(can_view),
    db: Session = Depends(get_db),
):
    items = populate.subcategories(
        db,
        crud.list_subcategories(db),
        category_id=populate.NAME_ONLY,
        created_by=populate.USER_FULL,
    )
    return ApiListResponse(count=len(items), data=items)


@router.get(
    "/{subcategory_id}",
    response_model=ApiResponse[SubcategoryRead],
    response_model_exclude_none=True,
    summary="Get subcategory by id (all roles)",
)
def get_subcategory(
    subcategory_id: str,
    identity: Identity = Depends(can_view),
    db: Session = Depends(get_db),
):
    obj = crud.get_or_raise(db, subcategory_id)
    data = populate.subcategory(
        db, obj, category_id=populate.NAME_ONLY, created_by=populate.USER_BRIEF
    )
    return ApiResponse(data=data)


@router.put(
    "/{subcategory_id}",
    response_model=ApiResponse[SubcategoryRead],
    response_model_exclude_none=True,
    summary="Update subcategory (admin, coordinador)",
)
def update_subcategory(
    subcategory_id: str,
    payload: SubcategoryUpdate,
    identity: Identity = Depends(can_edit),
    db: Session = Depends(get_db),
):
    obj = crud.get_or_raise(db, subcategory_id)
    obj = crud.update(db, obj, payload.model_dump(exclude_unset=True), identity.id)
    return ApiResponse(message="Subcategory updated successfully", data=populate.subcategory(db, obj))


@router.delete(
    "/{subcategory_id}",
    response_model=ApiResponse[SubcategoryRead],
    response_model_exclude_none=True,
    summary="Delete subcategory (admin); products are kept",
)
def delete_subcategory(
    subcategory_id: str,
    identity: Identity = Depends(can_delete),
    db: Session = Depends(get_db),
):
    obj = crud.get_or_raise(db, subcategory_id)
    obj = crud.delete(db, obj)
    return ApiResponse(message="Subcategory deleted successfully", data=populate.subcategory(db, obj))
