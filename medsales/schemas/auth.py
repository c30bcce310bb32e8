from medsales.models.user import UserRole
from medsales.schemas import BaseRequest, BaseResponse


class UserLogin(BaseRequest):
    username: str
    password: str


class UserResponse(BaseResponse):
    id: int
    username: str
    role: UserRole


class Auth(BaseResponse):
    token_type: str = "Bearer"
    token: str
    expires_at: int


class AuthResponse(Auth):
    user: UserResponse


class VerifyResponse(BaseResponse):
    user: UserResponse
