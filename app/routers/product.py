# app/routers/product.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.security import Identity
from app.crud import product as crud
from app.database import get_db
from app.routers.deps import can_create, can_delete, can_edit, can_view
from app.schemas.common import ApiListResponse, ApiResponse
from app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from app.services import populate

router = APIRouter(prefix="/products", tags=["products"])


@router.post(
    "",
    response_model=ApiResponse[ProductRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product (admin, coordinador)",
)
def create_product(
    payload: ProductCreate,
    identity: Identity = Depends(can_create),
    db: Session = Depends(get_db),
):
    obj = crud.create(db, payload.model_dump(exclude_unset=True), identity.id)
    data = populate.product(
        db,
        obj,
        category_id=populate.NAME_ONLY,
        subcategory_id=populate.NAME_ONLY,
        created_by=populate.USER_FULL,
    )
    return ApiResponse(message="Product created successfully", data=data)


@router.get(
    "",
    response_model=ApiListResponse[ProductRead],
    response_model_exclude_none=True,
    summary="List products, newest first (all roles)",
)
def list_products(
    identity: Identity = Depends(can_view),
    db: Session = Depends(get_db),
):
    items = populate.products(
        db,
        crud.list_products(db),
        category_id=populate.NAME_ONLY,
        subcategory_id=populate.NAME_ONLY,
        created_by=populate.USER_BRIEF,
    )
    return ApiListResponse(count=len(items), data=items)


@router.get(
    "/{product_id}",
    response_model=ApiResponse[ProductRead],
    response_model_exclude_none=True,
    summary="Get a product by id (all roles)",
)
def get_product(
    product_id: str,
    identity: Identity = Depends(can_view),
    db: Session = Depends(get_db),
):
    obj = crud.get_or_raise(db, product_id)
    data = populate.product(
        db,
        obj,
        category_id=populate.NAME_DESCRIPTION,
        subcategory_id=populate.NAME_DESCRIPTION,
        created_by=populate.USER_BRIEF,
    )
    return ApiResponse(data=data)


@router.put(
    "/{product_id}",
    response_model=ApiResponse[ProductRead],
    response_model_exclude_none=True,
    summary="Update a product (admin, coordinador)",
)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    identity: Identity = Depends(can_edit),
    db: Session = Depends(get_db),
):
    obj = crud.get_or_raise(db, product_id)
    obj = crud.update(db, obj, payload.model_dump(exclude_unset=True), identity.id)
    data = populate.product(
        db,
        obj,
        category_id=populate.NAME_ONLY,
        subcategory_id=populate.NAME_ONLY,
        updated_by=populate.USER_BRIEF,
    )
    return ApiResponse(message="Product updated successfully", data=data)


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[ProductRead],
    response_model_exclude_none=True,
    summary="Delete a product (admin)",
)
def delete_product(
    product_id: str,
    identity: Identity = Depends(can_delete),
    db: Session = Depends(get_db),
):
    obj = crud.get_or_raise(db, product_id)
    obj = crud.delete(db, obj)
    return ApiResponse(message="Product deleted successfully", data=populate.product(db, obj))
