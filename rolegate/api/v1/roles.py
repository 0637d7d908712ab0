"""Role management endpoints (admin only): change a user's role, list users by role, list roles."""

import json
import logging
from typing import Annotated

from asgi_correlation_id import correlation_id
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from rolegate.api.v1.auth import get_user_store, require_admin
from rolegate.core.roles import all_roles
from rolegate.schemas.auth import CurrentUser
from rolegate.schemas.user import AvailableRolesResponse, UpdateUserRoleRequest, UserResponse
from rolegate.services.role_service import (
    InvalidRoleError,
    RoleService,
    RoleServiceError,
    SameRoleError,
)
from rolegate.services.user_store import SqlAlchemyUserStore

logger = logging.getLogger(__name__)
router = APIRouter()


def get_role_service(
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
) -> RoleService:
    """Dependency: RoleService over the request-scoped user store."""
    return RoleService(store)


def _parse_user_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        logger.warning("Invalid user ID", extra={"raw_user_id": raw, "request_id": correlation_id.get()})
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid user ID",
        ) from e


async def _read_role_request(request: Request) -> UpdateUserRoleRequest:
    """Parse and validate the JSON body; every malformed body is a 400."""
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request body",
        ) from e
    if not isinstance(data, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request body",
        )
    try:
        return UpdateUserRoleRequest.model_validate(data)
    except ValidationError as e:
        logger.warning(
            "Role update validation failed",
            extra={"errors": e.error_count(), "request_id": correlation_id.get()},
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Validation failed",
        ) from e


@router.put("/users/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: str,
    request: Request,
    service: Annotated[RoleService, Depends(get_role_service)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> UserResponse:
    """
    Change a user's role.

    400 for a non-integer id, a malformed body, an unknown role, or when the user
    already has the role. A missing user and a storage failure both return 500.
    """
    uid = _parse_user_id(user_id)
    body = await _read_role_request(request)
    try:
        return await run_in_threadpool(service.update_user_role, uid, body.role)
    except InvalidRoleError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role") from e
    except SameRoleError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already has this role",
        ) from e
    except RoleServiceError as e:
        logger.error(
            "Failed to update user role",
            extra={"reason": e.message, "request_id": correlation_id.get()},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user role",
        ) from e


@router.get("/users", response_model=list[UserResponse])
def get_users_by_role(
    service: Annotated[RoleService, Depends(get_role_service)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    role: Annotated[str | None, Query(description="admin, moderator or user")] = None,
) -> list[UserResponse]:
    """List users holding exactly the given role (may be empty)."""
    if not role:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Role query parameter is required",
        )
    try:
        return service.get_users_by_role(role)
    except InvalidRoleError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role") from e
    except RoleServiceError as e:
        logger.error(
            "Failed to get users by role",
            extra={"reason": e.message, "request_id": correlation_id.get()},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get users by role",
        ) from e


@router.get("/available", response_model=AvailableRolesResponse)
def get_available_roles(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> AvailableRolesResponse:
    """Return every assignable role in fixed order."""
    return AvailableRolesResponse(roles=all_roles())
