from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from medsales.core.database import get_db
from medsales.core.exceptions import ForbiddenError, NotFoundError
from medsales.core.logger import logger
from medsales.core.middleware import can_edit, get_optional_user, user_is_editor
from medsales.models.product import Product, ProductStatus
from medsales.models.user import User
from medsales.schemas import (
    ApiResponse,
    MessageResponse,
    PageRequest,
    PaginatedResponse,
    page_request,
)
from medsales.schemas.product import ProductCreate, ProductResponse, ProductUpdate

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
async def get_all_products(
    page: PageRequest = Depends(page_request),
    q: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[ProductStatus] = None,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
) -> ApiResponse[PaginatedResponse[ProductResponse]]:
    """List products, featured first, newest first"""
    if status not in (None, ProductStatus.active) and not can_edit(user):
        raise ForbiddenError("Only editors can list inactive products")

    where = Product.build_filter(
        {"status": status, "category": category}, search=q
    )
    products, total = Product.paginate(db, page, where=where)
    items = [ProductResponse.model_validate(product) for product in products]
    return ApiResponse(data=PaginatedResponse.build(items, total, page))


@router.get("/{product_key}")
async def get_product(
    product_key: str,
    db: Session = Depends(get_db),
) -> ApiResponse[ProductResponse]:
    """Get an active product by numeric ID or slug"""
    product = Product.lookup(db, product_key, status=ProductStatus.active)
    if not product:
        raise NotFoundError("Product not found")
    return ApiResponse(data=ProductResponse.model_validate(product))


@router.post("", status_code=201)
async def create_product(
    product: ProductCreate,
    db: Session = Depends(get_db),
    _: User = Depends(user_is_editor),
) -> ApiResponse[ProductResponse]:
    """Create a new product"""
    new_product = Product(**product.model_dump())
    new_product.assign_slug(db, product.name)
    new_product.save(db)
    logger.info(f"Created product {new_product.id} ({new_product.slug})")
    return ApiResponse(data=ProductResponse.model_validate(new_product))


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    product: ProductUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(user_is_editor),
) -> ApiResponse[ProductResponse]:
    """Update a product; the slug follows the name only when the name changes"""
    existing_product = Product.get(db, id=product_id)
    if not existing_product:
        raise NotFoundError("Product not found")

    update_data = product.model_dump(exclude_unset=True, exclude_none=True)
    name = update_data.get("name")
    if name is not None and name != existing_product.name:
        existing_product.assign_slug(db, name)
    for key, value in update_data.items():
        setattr(existing_product, key, value)
    existing_product.save(db)
    logger.info(f"Updated product {existing_product.id}")
    return ApiResponse(data=ProductResponse.model_validate(existing_product))


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(user_is_editor),
) -> ApiResponse[MessageResponse]:
    """Delete a product"""
    product = Product.get(db, id=product_id)
    if not product:
        raise NotFoundError("Product not found")

    product.delete(db)
    logger.info(f"Deleted product {product_id}")
    return ApiResponse(data=MessageResponse(message="Product deleted successfully"))
