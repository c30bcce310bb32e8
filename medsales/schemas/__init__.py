import math
from typing import Generic, List, Optional, TypeVar

from fastapi import Query
from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel

from medsales.core.config import settings

T = TypeVar("T")

# keeps (page - 1) * page_size inside a signed 64-bit OFFSET
MAX_PAGE = (2**63 - 1) // settings.MAX_PAGE_SIZE


class BaseRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BaseResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ApiResponse(BaseResponse, Generic[T]):
    """Envelope shared by every endpoint: ``{success, data?, error?}``."""

    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = None

    @model_serializer(mode="wrap")
    def drop_empty_parts(self, handler):
        return {key: value for key, value in handler(self).items() if value is not None}


class PageRequest(BaseModel):
    """One-indexed page number and a page size clamped to the allowed range."""

    page: int = 1
    page_size: int = settings.DEFAULT_PAGE_SIZE

    @classmethod
    def clamp(
        cls, page: Optional[int] = None, page_size: Optional[int] = None
    ) -> "PageRequest":
        page = 1 if page is None else page
        page_size = settings.DEFAULT_PAGE_SIZE if page_size is None else page_size
        return cls(
            page=min(MAX_PAGE, max(1, page)),
            page_size=min(settings.MAX_PAGE_SIZE, max(1, page_size)),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def page_request(
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
) -> PageRequest:
    """Query-string dependency; out-of-range values are clamped, not rejected."""
    return PageRequest.clamp(page, page_size)


class Pagination(BaseResponse):
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: PageRequest, total: int) -> "Pagination":
        return cls(
            page=page.page,
            page_size=page.page_size,
            total=total,
            total_pages=math.ceil(total / page.page_size),
            has_next=page.page * page.page_size < total,
            has_prev=page.page > 1,
        )


class PaginatedResponse(BaseResponse, Generic[T]):
    items: List[T]
    pagination: Pagination

    @classmethod
    def build(
        cls, items: List[T], total: int, page: PageRequest
    ) -> "PaginatedResponse[T]":
        return cls(items=items, pagination=Pagination.build(page, total))


class MessageResponse(BaseResponse):
    message: str
