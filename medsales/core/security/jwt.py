from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel
from sqlalchemy.orm import Session

from medsales.core.config import settings
from medsales.core.exceptions import AuthError
from medsales.models.user import User
from medsales.schemas.auth import Auth

ALGORITHM = "HS256"


class TokenData(BaseModel):
    sub: str
    username: str
    role: str
    exp: datetime


def token_expiry() -> datetime:
    return datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )


def create_token(user: User) -> Auth:
    """Create a new signed access token for the user"""
    expire = token_expiry()
    token_data = TokenData(
        sub=str(user.id), username=user.username, role=user.role.value, exp=expire
    )
    token = jwt.encode(token_data.model_dump(), settings.SECRET_KEY, algorithm=ALGORITHM)
    return Auth(token=str(token), expires_at=int(expire.timestamp()))


def decode_token(token: str) -> TokenData:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        return TokenData(**payload)
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except (jwt.InvalidTokenError, ValueError):
        raise AuthError("Invalid token")


def verify_token(db: Session, token: str) -> User:
    """Verify token and return the user it was issued to"""
    data = decode_token(token)
    user = User.get(db, id=int(data.sub))
    if not user:
        raise AuthError("Invalid token")
    return user
