"""Pydantic request/response schemas."""

from rolegate.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from rolegate.schemas.health import HealthResponse
from rolegate.schemas.user import (
    AvailableRolesResponse,
    UpdateUserRoleRequest,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "AvailableRolesResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "TokenResponse",
    "UpdateUserRoleRequest",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
