from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import DateTime, Integer, String, and_, func, or_, select, true
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Mapped, Session, mapped_column
from sqlalchemy.sql.elements import ColumnElement

from medsales.core.database import Base
from medsales.core.exceptions import ConflictError, StoreError, ValidationError
from medsales.core.utils import SLUG_MAX_LENGTH, slugify
from medsales.schemas import PageRequest

T = TypeVar("T", bound="BaseModel")


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Re-raise any driver failure inside the block as a StoreError."""
    try:
        yield
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to {action}", detail=str(e)) from e


class BaseModel(Base):
    __abstract__ = True

    # Equality filters accepted by list endpoints, in predicate order.
    FILTER_FIELDS: Sequence[str] = ()
    # Applied when the caller leaves a filter out.
    DEFAULT_FILTERS: Mapping[str, Any] = {}
    # Columns matched (OR) by the free-text ``q`` filter.
    SEARCH_FIELDS: Sequence[str] = ()
    CONFLICT_MESSAGE = "Resource already exists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    @classmethod
    def default_order(cls) -> list[ColumnElement]:
        return [cls.created_at.desc()]

    def model_dump(self) -> dict:
        return {c.name: getattr(self, c.name) for c in self.__table__.columns}

    @classmethod
    def get(cls: type[T], db: Session, **filters: Any) -> T | None:
        query = select(cls)
        for attr, value in filters.items():
            if hasattr(cls, attr):
                query = query.where(getattr(cls, attr) == value)
        with store_errors(f"load {cls.__tablename__}"):
            return db.scalars(query.limit(1)).first()

    @classmethod
    def lookup(cls: type[T], db: Session, key: str, **filters: Any) -> T | None:
        """Find a row by numeric id or, failing that, by slug."""
        if key.isascii() and key.isdigit():
            return cls.get(db, id=int(key), **filters)
        if not hasattr(cls, "slug"):
            return None
        return cls.get(db, slug=key, **filters)

    @classmethod
    def build_filter(
        cls,
        filters: Optional[Mapping[str, Any]] = None,
        search: Optional[str] = None,
    ) -> ColumnElement[bool]:
        """AND together the recognised filters into a single predicate.

        Equality filters come first in ``FILTER_FIELDS`` order, then the
        free-text search. With nothing to filter on the predicate is a
        plain ``true()`` so the statement stays complete.
        """
        filters = dict(filters or {})
        unknown = set(filters) - set(cls.FILTER_FIELDS)
        if unknown:
            raise ValidationError(f"Invalid filter attribute: {', '.join(sorted(unknown))}")

        conditions: list[ColumnElement[bool]] = []
        for attr in cls.FILTER_FIELDS:
            value = filters.get(attr)
            if value is None or value == "":
                value = cls.DEFAULT_FILTERS.get(attr)
            if value is None:
                continue
            conditions.append(getattr(cls, attr) == value)

        search = (search or "").strip()
        if search and cls.SEARCH_FIELDS:
            conditions.append(
                or_(
                    *(
                        getattr(cls, field).icontains(search, autoescape=True)
                        for field in cls.SEARCH_FIELDS
                    )
                )
            )

        return and_(true(), *conditions)

    @classmethod
    def paginate(
        cls: type[T],
        db: Session,
        page: PageRequest,
        where: Optional[ColumnElement[bool]] = None,
        order_by: Optional[Sequence[ColumnElement]] = None,
    ) -> tuple[list[T], int]:
        """Return one page of rows plus the total under the same predicate.

        The count runs first; if it fails the slice is never queried.
        ``id DESC`` is always the last sort key so pages never overlap.
        """
        where = where if where is not None else true()
        order = list(order_by if order_by is not None else cls.default_order())
        order.append(cls.id.desc())

        with store_errors(f"count {cls.__tablename__}"):
            total = db.scalar(select(func.count()).select_from(cls).where(where)) or 0

        with store_errors(f"list {cls.__tablename__}"):
            items = db.scalars(
                select(cls)
                .where(where)
                .order_by(*order)
                .offset(page.offset)
                .limit(page.page_size)
            ).all()

        return list(items), total

    def save(self: T, db: Session) -> T:
        return self.save_all(db, [self])[0]

    @classmethod
    def save_all(cls, db: Session, rows: Sequence[T]) -> Sequence[T]:
        """Commit every row in one transaction.

        A unique-constraint violation rolls the whole batch back and is
        reported as a ConflictError.
        """
        try:
            db.add_all([row for row in rows if not row.id])
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError(cls.CONFLICT_MESSAGE) from e
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError(
                f"Failed to save {cls.__tablename__}", detail=str(e)
            ) from e
        for row in rows:
            db.refresh(row)
        return rows

    def delete(self, db: Session) -> bool:
        try:
            db.delete(self)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError(
                f"Failed to delete {self.__tablename__}", detail=str(e)
            ) from e
        return True


class SluggedModel(BaseModel):
    """Rows addressable by a unique slug derived from ``SLUG_SOURCE``."""

    __abstract__ = True

    SLUG_SOURCE = "name"

    slug: Mapped[str] = mapped_column(
        String(SLUG_MAX_LENGTH), unique=True, index=True, nullable=False
    )

    def assign_slug(self, db: Session, title: Optional[str]) -> str:
        """Set ``slug`` from ``title`` after checking no other row holds it.

        The unique index on ``slug`` still backs this up: a concurrent
        insert that slips past the check fails in ``save`` with the same
        ConflictError.
        """
        slug = slugify(title or "")
        if not slug:
            raise ValidationError(
                f"{self.SLUG_SOURCE.capitalize()} must contain letters or digits"
            )

        cls = type(self)
        query = select(cls.id).where(cls.slug == slug)
        if self.id is not None:
            query = query.where(cls.id != self.id)
        with store_errors(f"check {cls.__tablename__} slug"):
            taken = db.scalar(query.limit(1)) is not None
        if taken:
            raise ConflictError(self.CONFLICT_MESSAGE)

        self.slug = slug
        return slug
