"""Role transitions: validate a requested role, reject no-ops, and persist through a UserStore."""

import logging

from rolegate.core.roles import is_valid_role
from rolegate.models import User
from rolegate.schemas.user import UserResponse
from rolegate.services.user_store import UserNotFoundError, UserStore

logger = logging.getLogger(__name__)


class RoleServiceError(Exception):
    """Base class for role transition failures."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class InvalidRoleError(RoleServiceError):
    """The requested or queried role is not one of the known roles."""

    def __init__(self, role: str) -> None:
        self.role = role
        super().__init__("invalid role")


class SameRoleError(RoleServiceError):
    """The user already holds the requested role; a no-op change is rejected."""

    def __init__(self, user_id: int, role: str) -> None:
        self.user_id = user_id
        self.role = role
        super().__init__("user already has this role")


class RoleUserNotFoundError(RoleServiceError):
    """The user referenced by a role change does not exist."""

    def __init__(self, user_id: int, cause: Exception | None = None) -> None:
        self.user_id = user_id
        super().__init__("user not found", cause)


class RoleServiceInternalError(RoleServiceError):
    """Storage or unexpected failure while reading or writing users."""


def to_user_response(user: User) -> UserResponse:
    """Project a stored user into its public shape (no password hash)."""
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class RoleService:
    """Applies role changes and role lookups on top of a UserStore. Holds no state of its own."""

    def __init__(self, store: UserStore) -> None:
        self.store = store

    def update_user_role(self, user_id: int, new_role: str) -> UserResponse:
        """
        Change a user's role.

        Raises InvalidRoleError before any storage access when new_role is unknown,
        RoleUserNotFoundError when the user does not exist, SameRoleError when the
        user already holds new_role (nothing is written), and RoleServiceInternalError
        for any storage failure.
        """
        logger.info("Updating user role", extra={"user_id": user_id, "new_role": new_role})

        if not is_valid_role(new_role):
            logger.warning("Invalid role provided", extra={"role": new_role})
            raise InvalidRoleError(new_role)

        try:
            current = self.store.get_by_id(user_id)
        except UserNotFoundError as e:
            logger.warning("User not found for role update", extra={"user_id": user_id})
            raise RoleUserNotFoundError(user_id, e) from e
        except Exception as e:
            logger.error("Failed to get user for role update: %s", e)
            raise RoleServiceInternalError("failed to get user", e) from e

        old_role = current.role
        if old_role == new_role:
            logger.warning(
                "User already has the specified role",
                extra={"user_id": user_id, "role": new_role},
            )
            raise SameRoleError(user_id, new_role)

        try:
            updated = self.store.update_role(user_id, new_role)
        except Exception as e:
            logger.error("Failed to update user role: %s", e)
            raise RoleServiceInternalError("failed to update user role", e) from e

        logger.info(
            "User role updated",
            extra={"user_id": user_id, "old_role": old_role, "new_role": new_role},
        )
        return to_user_response(updated)

    def get_users_by_role(self, role: str) -> list[UserResponse]:
        """Return every user whose role is exactly `role`, in store order. Empty is not an error."""
        logger.debug("Getting users by role", extra={"role": role})

        if not is_valid_role(role):
            logger.warning("Invalid role provided for user lookup", extra={"role": role})
            raise InvalidRoleError(role)

        try:
            users = self.store.list_by_role(role)
        except Exception as e:
            logger.error("Failed to get users by role: %s", e)
            raise RoleServiceInternalError("failed to get users by role", e) from e

        responses = [to_user_response(u) for u in users]
        logger.debug("Retrieved users by role", extra={"role": role, "count": len(responses)})
        return responses
