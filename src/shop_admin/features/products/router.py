"""API routes for the product catalog."""
from fastapi import APIRouter, status, Query, Depends
from typing import Optional, Annotated

from .schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    ProductCategory,
    ProductStatus,
)
from . import service

from ..auth.models import (
    User as AuthUser,
)
from ..auth.security import get_current_active_admin_user

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    responses={404: {"description": "Not found"}},
)


@router.get(
    "/",
    response_model=ProductListResponse,
    summary="List products, newest first",
)
async def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Number of products per page"),
    category: Optional[ProductCategory] = Query(None, description="Only this category"),
    product_status: Optional[ProductStatus] = Query(None, alias="status", description="Only this status"),
):
    return await service.list_products(page, limit, category, product_status)


@router.get(
    "/{product_public_id}",
    response_model=ProductResponse,
    summary="Get a specific product",
)
async def get_product(product_public_id: str):
    return ProductResponse(data=await service.get_product(product_public_id))


@router.post(
    "/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
)
async def create_product(
    product_in: ProductCreate,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    return ProductResponse(data=await service.create_product(product_in, current_admin))


@router.put(
    "/{product_public_id}",
    response_model=ProductResponse,
    summary="Update a product",
)
async def update_product(
    product_public_id: str,
    product_in: ProductUpdate,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    return ProductResponse(data=await service.update_product(product_public_id, product_in))


@router.delete(
    "/{product_public_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
)
async def delete_product(
    product_public_id: str,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    await service.delete_product(product_public_id)
    return None
