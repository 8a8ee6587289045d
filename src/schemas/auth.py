"""Authentication schemas."""

from pydantic import ConfigDict, EmailStr, Field

from src.schemas.base import CamelModel


class UserRegister(CamelModel):
    """User registration request."""

    username: str = Field(..., max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=72)


class UserLogin(CamelModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=72)


class UserResponse(CamelModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str


class AuthResponse(CamelModel):
    """Authentication response with token and user info."""

    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse
