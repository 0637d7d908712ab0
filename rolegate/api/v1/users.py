"""User CRUD endpoints guarded by role allow-lists."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from rolegate.api.v1.auth import get_user_store, require_admin, require_moderator_or_admin
from rolegate.core.security import hash_password
from rolegate.schemas.auth import CurrentUser
from rolegate.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest
from rolegate.services.role_service import to_user_response
from rolegate.services.user_store import (
    EmailAlreadyExistsError,
    SqlAlchemyUserStore,
    UserNotFoundError,
)

router = APIRouter()


def _not_found(e: UserNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreateRequest,
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> UserResponse:
    """Create a user with an explicit role (admin only)."""
    if store.get_by_email(body.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        )
    try:
        user = store.create(
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password),
            role=body.role.value,
        )
    except EmailAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return to_user_response(user)


@router.get("", response_model=list[UserResponse])
def list_users(
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
    _staff: Annotated[CurrentUser, Depends(require_moderator_or_admin)],
) -> list[UserResponse]:
    """List all users ordered by id (moderator or admin)."""
    return [to_user_response(u) for u in store.list_all()]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
    _staff: Annotated[CurrentUser, Depends(require_moderator_or_admin)],
) -> UserResponse:
    try:
        return to_user_response(store.get_by_id(user_id))
    except UserNotFoundError as e:
        raise _not_found(e) from e


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> UserResponse:
    """Rename a user (admin only). Roles change only through /roles."""
    try:
        return to_user_response(store.update_name(user_id, body.name))
    except UserNotFoundError as e:
        raise _not_found(e) from e


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    try:
        store.delete(user_id)
    except UserNotFoundError as e:
        raise _not_found(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
