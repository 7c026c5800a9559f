from pydantic import BaseModel, EmailStr, Field

from brandhub.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"


class AuthMeResponse(BaseModel):
    """Response wrapper for /auth/me."""

    user: UserResponse
