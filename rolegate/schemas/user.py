"""Schemas for user records and the role management endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rolegate.core.roles import Role
from rolegate.schemas.auth import EMAIL_PATTERN


class UserResponse(BaseModel):
    """Public projection of a user. The password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    created_at: datetime
    updated_at: datetime


class UserCreateRequest(BaseModel):
    """Admin-side user creation; role defaults to 'user'."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)
    role: Role = Role.USER


class UserUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class UpdateUserRoleRequest(BaseModel):
    """Body of PUT /roles/users/{id}/role. Membership is checked by RoleService."""

    role: str = Field(..., min_length=1, max_length=32, description="Target role")


class AvailableRolesResponse(BaseModel):
    roles: list[Role]
