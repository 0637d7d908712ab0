"""JWT login/registration and auth dependencies (get_current_user, require_roles)."""

import logging
from collections.abc import Callable
from typing import Annotated

import jwt
from asgi_correlation_id import correlation_id
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from rolegate.core.authorization import (
    ADMIN_ONLY,
    MODERATOR_OR_ADMIN,
    AccessDeniedError,
    authorize,
)
from rolegate.core.config import get_settings
from rolegate.core.database import get_db
from rolegate.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from rolegate.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from rolegate.schemas.user import UserResponse
from rolegate.services.role_service import to_user_response
from rolegate.services.user_store import (
    EmailAlreadyExistsError,
    SqlAlchemyUserStore,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> SqlAlchemyUserStore:
    """Dependency: user store bound to the request's DB session."""
    return SqlAlchemyUserStore(db)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_id_from_payload(payload: dict) -> int:
    sub = payload.get("sub")
    if not sub:
        raise _unauthorized("Invalid token payload")
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")


def _issue_tokens(user_id: int, role: str) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(sub=user_id, role=role),
        refresh_token=create_refresh_token(sub=user_id, role=role),
        token_type="bearer",
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
) -> UserResponse:
    """Create an account with the default role. Clients cannot choose their own role."""
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
            role=get_settings().DEFAULT_ROLE,
        )
    except EmailAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return to_user_response(user)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns an access and a refresh token.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    user = store.get_by_email(body.email)
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Login failed", extra={"reason": "bad_credentials"})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )
    return _issue_tokens(user.id, user.role)


@router.post("/refresh", response_model=TokenResponse)
def refresh(
    body: RefreshRequest,
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
) -> TokenResponse:
    """Exchange a refresh token for a new token pair carrying the user's current role."""
    try:
        payload = decode_token(body.refresh_token, expected_type=REFRESH_TOKEN_TYPE)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired refresh token")
    user_id = _user_id_from_payload(payload)
    try:
        user = store.get_by_id(user_id)
    except UserNotFoundError:
        raise _unauthorized("User not found")
    return _issue_tokens(user.id, user.role)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    user_id = _user_id_from_payload(payload)
    try:
        user = store.get_by_id(user_id)
    except UserNotFoundError:
        raise _unauthorized("User not found")
    # Role comes from the database, not the token, so role changes apply immediately.
    return CurrentUser.model_validate(user)


def require_roles(*allowed_roles: str) -> Callable[..., CurrentUser]:
    """Build a dependency that admits only principals whose role is in allowed_roles (exact match)."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        try:
            return authorize(current_user, allowed_roles, request_id=correlation_id.get())
        except AccessDeniedError as e:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e

    return dependency


require_admin = require_roles(*ADMIN_ONLY)
require_moderator_or_admin = require_roles(*MODERATOR_OR_ADMIN)


@router.get("/me", response_model=UserResponse)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[SqlAlchemyUserStore, Depends(get_user_store)],
) -> UserResponse:
    """Return the caller's own profile."""
    try:
        user = store.get_by_id(current_user.id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return to_user_response(user)
