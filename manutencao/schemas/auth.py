from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class User(BaseModel):
    """Public user record (never carries the password).

    Attributes:
        id: User identifier.
        name: Display name.
        email: Login email.
        role: Access role.
        avatar: Optional avatar URL.
    """

    id: str
    name: str
    email: str
    role: UserRole = UserRole.USER
    avatar: Optional[str] = None


class LoginRequest(BaseModel):
    """Login payload with email and password."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response payload.

    Attributes:
        access_token: Bearer token for the API.
        token_type: OAuth2 token type, defaults to 'bearer'.
        user: The authenticated user.
    """

    access_token: str
    token_type: str = "bearer"
    user: User


class ThemeUpdate(BaseModel):
    theme: Theme


class SessionInfo(BaseModel):
    user: User
    theme: Theme
