"""Role allow-list checks applied to the authenticated principal of a request."""

import logging
from collections.abc import Iterable

from rolegate.core.roles import Role
from rolegate.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

ADMIN_ONLY: tuple[Role, ...] = (Role.ADMIN,)
MODERATOR_OR_ADMIN: tuple[Role, ...] = (Role.ADMIN, Role.MODERATOR)


class AccessDeniedError(Exception):
    """Raised when the principal is missing or its role is not in the allow-list."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def is_role_allowed(principal_role: str | None, allowed_roles: Iterable[str]) -> bool:
    """
    Exact-match decision: True iff principal_role equals one of allowed_roles.

    There is no hierarchy; an allow-list must name every role it accepts.
    A missing principal role is never allowed.
    """
    if principal_role is None:
        return False
    return any(principal_role == allowed for allowed in allowed_roles)


def authorize(
    principal: CurrentUser | None,
    allowed_roles: Iterable[str],
    request_id: str | None = None,
) -> CurrentUser:
    """Return the principal if its role is allowed, else raise AccessDeniedError."""
    allowed = tuple(allowed_roles)
    required = ", ".join(str(r) for r in allowed)

    if principal is None:
        logger.warning(
            "User role not found on request",
            extra={"request_id": request_id, "required_roles": required},
        )
        raise AccessDeniedError("Access denied")

    if not is_role_allowed(principal.role, allowed):
        logger.warning(
            "Access denied - insufficient role",
            extra={
                "user_role": str(principal.role),
                "required_roles": required,
                "request_id": request_id,
            },
        )
        raise AccessDeniedError("Insufficient permissions")

    logger.debug(
        "Role access granted",
        extra={
            "user_role": str(principal.role),
            "required_roles": required,
            "request_id": request_id,
        },
    )
    return principal
