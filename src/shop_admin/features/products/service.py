import logging
from typing import Optional
from fastapi import HTTPException, status

from ..auth.models import User as AuthUser
from .models import Product
from .schemas import (
    ProductCreate,
    ProductUpdate,
    ProductPublic,
    ProductListResponse,
    ProductCategory,
    ProductStatus,
)

logger = logging.getLogger(__name__)


def _to_product_public(product: Product) -> ProductPublic:
    return ProductPublic.model_validate(product)


async def _get_product_or_404(product_public_id: str) -> Product:
    product = await Product.get_or_none(public_id=product_public_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product not found with id of {product_public_id}",
        )
    return product


async def create_product(product_in: ProductCreate, created_by: AuthUser) -> ProductPublic:
    """
    Creates a new product owned by the requesting admin.

    Args:
        product_in: The data for the new product.
        created_by: The admin creating it.

    Returns:
        The created product.
    """
    product_data = product_in.model_dump(mode="json")
    try:
        product = await Product.create(**product_data, created_by=created_by)
    except Exception as e:
        logger.error(f"Error creating product: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create product.",
        )
    logger.info(f"Product {product.public_id} created by {created_by.public_id}")
    return _to_product_public(product)


async def list_products(
    page: int,
    limit: int,
    category: Optional[ProductCategory] = None,
    product_status: Optional[ProductStatus] = None,
) -> ProductListResponse:
    """
    Lists products, newest first.

    Args:
        page: The page number, starting at 1.
        limit: The number of products per page.
        category: Only products in this category.
        product_status: Only products with this status.

    Returns:
        One page of products plus the total number of matches.
    """
    offset = (page - 1) * limit
    filters = {}
    if category:
        filters["category"] = category.value
    if product_status:
        filters["status"] = product_status.value

    products = (
        await Product.filter(**filters)
        .order_by("-created_at", "-id")
        .offset(offset)
        .limit(limit)
    )
    total = await Product.filter(**filters).count()
    return ProductListResponse(
        count=len(products),
        total=total,
        page=page,
        limit=limit,
        data=[_to_product_public(product) for product in products],
    )


async def get_product(product_public_id: str) -> ProductPublic:
    return _to_product_public(await _get_product_or_404(product_public_id))


async def update_product(product_public_id: str, product_in: ProductUpdate) -> ProductPublic:
    """
    Applies a partial update to a product.

    Raises:
        HTTPException: 404 for an unknown product, 400 when no field is set.
    """
    product = await _get_product_or_404(product_public_id)

    update_data = product_in.model_dump(exclude_unset=True, mode="json")
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No fields for update"
        )

    for key, value in update_data.items():
        setattr(product, key, value)
    await product.save()
    return _to_product_public(product)


async def delete_product(product_public_id: str):
    """
    Deletes a product. Past order lines keep their name and price snapshot.
    """
    product = await _get_product_or_404(product_public_id)
    await product.delete()
    logger.info(f"Product {product_public_id} deleted")
    return None
