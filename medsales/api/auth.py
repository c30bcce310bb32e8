from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from medsales.core.database import get_db
from medsales.core.exceptions import AuthError, ValidationError
from medsales.core.logger import logger
from medsales.core.middleware import user_is_active
from medsales.core.security.jwt import create_token
from medsales.core.security.password import verify_password
from medsales.models.user import User
from medsales.schemas import ApiResponse
from medsales.schemas.auth import (
    Auth,
    AuthResponse,
    UserLogin,
    UserResponse,
    VerifyResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


def authenticate(db: Session, data: UserLogin) -> AuthResponse:
    if not data.username or not data.password:
        raise ValidationError("Username and password are required")

    user = User.get(db, username=data.username)
    if not user or not verify_password(data.password, user.password):
        logger.warning(f"Failed login for {data.username}")
        raise AuthError("Invalid credentials")
    if not user.is_active:
        raise AuthError("Inactive user")

    auth = create_token(user)
    return AuthResponse(
        **auth.model_dump(), user=UserResponse.model_validate(user)
    )


@router.post("/login")
async def login_user(
    data: UserLogin, db: Session = Depends(get_db)
) -> ApiResponse[AuthResponse]:
    """Login with username and password"""
    return ApiResponse(data=authenticate(db, data))


@router.post("/login/oauth2", include_in_schema=False)
async def login_user_form(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> dict:
    """OAuth2 password flow used by the interactive docs"""
    auth = authenticate(
        db, UserLogin(username=form_data.username, password=form_data.password)
    )
    return {"access_token": auth.token, "token_type": "bearer"}


@router.post("/verify")
async def verify(
    user: User = Depends(user_is_active),
) -> ApiResponse[VerifyResponse]:
    """Check the bearer token and return its user"""
    return ApiResponse(data=VerifyResponse(user=UserResponse.model_validate(user)))


@router.post("/refresh")
async def refresh_token(
    user: User = Depends(user_is_active),
) -> ApiResponse[Auth]:
    """Exchange a still valid token for a fresh one"""
    return ApiResponse(data=create_token(user))
