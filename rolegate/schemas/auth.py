"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from rolegate.core.roles import Role

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN, description="Email")
    password: str = Field(..., min_length=8, max_length=128, description="Password")


class RegisterRequest(BaseModel):
    """Self-registration payload. The role is not client-controlled."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token from login")


class TokenResponse(BaseModel):
    """JWT token pair returned after login or refresh."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentUser(BaseModel):
    """Authenticated principal (id, name, email, role) resolved once per request."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
