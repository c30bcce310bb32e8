from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from medsales.models.product import ProductStatus
from medsales.schemas import BaseRequest, BaseResponse


class ProductBase(BaseRequest):
    summary: str = ""
    description: str = ""
    price: float = Field(0, ge=0)
    category: str = Field("", max_length=100)
    images: list[str] = []
    specs: dict[str, Any] = {}
    featured: bool = False


class ProductCreate(ProductBase):
    name: str = Field(..., max_length=255)
    status: ProductStatus = ProductStatus.active


class ProductUpdate(ProductBase):
    name: Optional[str] = Field(None, max_length=255)
    summary: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = Field(None, max_length=100)
    images: Optional[list[str]] = None
    specs: Optional[dict[str, Any]] = None
    featured: Optional[bool] = None
    status: Optional[ProductStatus] = None


class ProductResponse(BaseResponse):
    id: int
    slug: str
    name: str
    summary: str
    description: str
    price: float
    category: str
    images: list[str]
    specs: dict[str, Any]
    featured: bool
    status: ProductStatus
    created_at: datetime
    updated_at: datetime
