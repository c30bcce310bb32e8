from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from medsales.core.config import settings
from medsales.core.database import get_db
from medsales.core.exceptions import AuthError, ForbiddenError
from medsales.core.security.jwt import verify_token
from medsales.models.user import User, UserRole

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login/oauth2", auto_error=False
)


async def get_current_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    db: Session = Depends(get_db),
) -> User:
    if not token:
        raise AuthError("Authorization token required")
    return verify_token(db, token)


async def get_optional_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Like get_current_user, but anonymous requests resolve to None."""
    if not token:
        return None
    return verify_token(db, token)


async def user_is_active(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    if not current_user.is_active:
        raise AuthError("Inactive user")
    return current_user


async def user_is_editor(
    current_user: Annotated[User, Depends(user_is_active)],
) -> User:
    if current_user.role not in [UserRole.editor, UserRole.admin]:
        raise ForbiddenError("Only editors and admins have access")
    return current_user


async def user_is_admin(current_user: Annotated[User, Depends(user_is_active)]) -> User:
    if current_user.role != UserRole.admin:
        raise ForbiddenError("Only admins have access")
    return current_user


def can_edit(user: Optional[User]) -> bool:
    return (
        user is not None
        and user.is_active
        and user.role in [UserRole.editor, UserRole.admin]
    )
