import enum

from sqlalchemy import Enum as SQLEnum
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from medsales.models import BaseModel


class UploadStatus(str, enum.Enum):
    # signed direct-upload parameters issued, blob not confirmed
    pending = "pending"
    active = "active"


class Upload(BaseModel):
    __tablename__ = "uploads"

    filename: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    size: Mapped[int] = mapped_column(Integer, default=0)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[UploadStatus] = mapped_column(
        SQLEnum(UploadStatus), nullable=False, default=UploadStatus.active
    )

    FILTER_FIELDS = ("status",)
    CONFLICT_MESSAGE = "Upload with this filename already exists"

    @property
    def public_id(self) -> str:
        return self.filename.rsplit(".", 1)[0]
