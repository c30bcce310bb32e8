from typing import Optional

from sqlalchemy import String, Text, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from medsales.models import BaseModel, store_errors


class SiteSetting(BaseModel):
    __tablename__ = "site_settings"

    setting_key: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False, index=True
    )
    setting_value: Mapped[str] = mapped_column(Text, default="")
    description: Mapped[str] = mapped_column(Text, default="")

    CONFLICT_MESSAGE = "Setting already exists"

    @classmethod
    def get_many(cls, db: Session, keys: Optional[list[str]] = None) -> list["SiteSetting"]:
        query = select(cls).order_by(cls.setting_key)
        if keys:
            query = query.where(cls.setting_key.in_(keys))
        with store_errors("load site_settings"):
            return list(db.scalars(query).all())

    @classmethod
    def upsert(
        cls,
        db: Session,
        key: str,
        value: str,
        description: Optional[str] = None,
    ) -> "SiteSetting":
        """Stage a new value for ``key``; the caller commits."""
        setting = cls.get(db, setting_key=key)
        if setting is None:
            setting = cls(setting_key=key, description=description or "")
        elif description is not None:
            setting.description = description
        setting.setting_value = value
        return setting
