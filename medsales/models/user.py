import enum

from sqlalchemy import Boolean
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import String
from sqlalchemy.orm import Mapped, Session, mapped_column

from medsales.core.security.password import hash_password
from medsales.models import BaseModel


class UserRole(enum.Enum):
    editor = "editor"
    admin = "admin"


class User(BaseModel):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )
    password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole), nullable=False, default=UserRole.admin
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    CONFLICT_MESSAGE = "User with this username already exists"

    @classmethod
    def ensure(
        cls,
        db: Session,
        username: str,
        password: str,
        role: UserRole = UserRole.admin,
    ) -> "User":
        """Create the account if missing; an existing password is left alone."""
        user = cls.get(db, username=username)
        if user:
            return user
        return cls(username=username, password=hash_password(password), role=role).save(db)
