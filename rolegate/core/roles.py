"""Role registry: the closed set of roles and their capability checks."""

from enum import StrEnum


class Role(StrEnum):
    """Every role a user can hold. Declaration order is the public order."""

    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


ROLE_VALUES: frozenset[str] = frozenset(r.value for r in Role)


def all_roles() -> list[Role]:
    """Return all valid roles in fixed order: admin, moderator, user."""
    return [Role.ADMIN, Role.MODERATOR, Role.USER]


def is_valid_role(candidate: object) -> bool:
    """True iff candidate is exactly one of the role identifiers (case-sensitive)."""
    return isinstance(candidate, str) and candidate in ROLE_VALUES


def has_admin_access(role: str) -> bool:
    return role == Role.ADMIN


def has_moderator_access(role: str) -> bool:
    """Moderator-level access or higher."""
    return role == Role.ADMIN or role == Role.MODERATOR


def can_manage_users(role: str) -> bool:
    return role == Role.ADMIN


def can_manage_files(role: str) -> bool:
    return role == Role.ADMIN or role == Role.MODERATOR


def can_view_all_users(role: str) -> bool:
    return role == Role.ADMIN or role == Role.MODERATOR
