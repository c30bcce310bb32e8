import enum
from typing import Any

from sqlalchemy import JSON, Boolean
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.elements import ColumnElement

from medsales.models import SluggedModel


class ProductStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"


class Product(SluggedModel):
    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str] = mapped_column(Text, default="")
    description: Mapped[str] = mapped_column(Text, default="")
    price: Mapped[float] = mapped_column(Float, default=0)
    category: Mapped[str] = mapped_column(String(100), default="", index=True)
    images: Mapped[list[str]] = mapped_column(JSON, default=list)
    specs: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    status: Mapped[ProductStatus] = mapped_column(
        SQLEnum(ProductStatus), nullable=False, default=ProductStatus.active
    )

    FILTER_FIELDS = ("status", "category")
    DEFAULT_FILTERS = {"status": ProductStatus.active}
    SEARCH_FIELDS = ("name", "summary")
    SLUG_SOURCE = "name"
    CONFLICT_MESSAGE = "Product with this name already exists"

    @classmethod
    def default_order(cls) -> list[ColumnElement]:
        return [cls.featured.desc(), cls.created_at.desc()]
