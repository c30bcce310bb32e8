from datetime import datetime
from typing import Optional

from pydantic import Field

from medsales.models.post import PostStatus
from medsales.schemas import BaseRequest, BaseResponse


class PostCreate(BaseRequest):
    title: str = Field(..., max_length=255)
    summary: str = ""
    content: str = ""
    author: str = Field("Admin", max_length=100)
    featured: bool = False
    status: PostStatus = PostStatus.published


class PostUpdate(BaseRequest):
    title: Optional[str] = Field(None, max_length=255)
    summary: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = Field(None, max_length=100)
    featured: Optional[bool] = None
    status: Optional[PostStatus] = None


class PostResponse(BaseResponse):
    id: int
    slug: str
    title: str
    summary: str
    content: str
    author: str
    featured: bool
    status: PostStatus
    created_at: datetime
    updated_at: datetime
