import enum

from sqlalchemy import Boolean
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.elements import ColumnElement

from medsales.models import SluggedModel


class PostStatus(str, enum.Enum):
    published = "published"
    draft = "draft"


class Post(SluggedModel):
    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str] = mapped_column(Text, default="")
    content: Mapped[str] = mapped_column(Text, default="")
    author: Mapped[str] = mapped_column(String(100), default="Admin")
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    status: Mapped[PostStatus] = mapped_column(
        SQLEnum(PostStatus), nullable=False, default=PostStatus.published
    )

    FILTER_FIELDS = ("status",)
    DEFAULT_FILTERS = {"status": PostStatus.published}
    SEARCH_FIELDS = ("title", "summary")
    SLUG_SOURCE = "title"
    CONFLICT_MESSAGE = "Post with this title already exists"

    @classmethod
    def default_order(cls) -> list[ColumnElement]:
        return [cls.featured.desc(), cls.created_at.desc()]
