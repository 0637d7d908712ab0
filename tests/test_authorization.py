"""Unit tests for role allow-list checks and the require_roles dependency."""

import unittest

from fastapi import HTTPException

from rolegate.api.v1.auth import require_admin, require_moderator_or_admin, require_roles
from rolegate.core.authorization import (
    ADMIN_ONLY,
    MODERATOR_OR_ADMIN,
    AccessDeniedError,
    authorize,
    is_role_allowed,
)
from rolegate.core.roles import Role
from rolegate.schemas.auth import CurrentUser


def _principal(role: str = "user") -> CurrentUser:
    return CurrentUser(id=1, name="Test", email="t@example.com", role=role)


class TestIsRoleAllowed(unittest.TestCase):
    """Exact match against the allow-list; no implied roles."""

    def test_user_not_in_moderator_or_admin(self) -> None:
        self.assertFalse(is_role_allowed("user", MODERATOR_OR_ADMIN))

    def test_admin_in_admin_only(self) -> None:
        self.assertTrue(is_role_allowed("admin", ADMIN_ONLY))

    def test_admin_not_implied_by_moderator_list(self) -> None:
        self.assertFalse(is_role_allowed("admin", [Role.MODERATOR]))

    def test_missing_principal_always_denied(self) -> None:
        for allowed in (ADMIN_ONLY, MODERATOR_OR_ADMIN, tuple(Role)):
            self.assertFalse(is_role_allowed(None, allowed))

    def test_empty_allow_list_denies_everyone(self) -> None:
        self.assertFalse(is_role_allowed("admin", []))


class TestAuthorize(unittest.TestCase):
    """authorize returns the principal or raises AccessDeniedError."""

    def test_allowed_principal_is_returned(self) -> None:
        principal = _principal("moderator")
        self.assertIs(authorize(principal, MODERATOR_OR_ADMIN), principal)

    def test_missing_principal_is_access_denied(self) -> None:
        with self.assertRaises(AccessDeniedError) as ctx:
            authorize(None, ADMIN_ONLY, request_id="req-1")
        self.assertEqual(ctx.exception.message, "Access denied")

    def test_insufficient_role(self) -> None:
        with self.assertRaises(AccessDeniedError) as ctx:
            authorize(_principal("user"), MODERATOR_OR_ADMIN)
        self.assertEqual(ctx.exception.message, "Insufficient permissions")

    def test_accepts_generator_allow_list(self) -> None:
        principal = _principal("admin")
        self.assertIs(authorize(principal, (r for r in ADMIN_ONLY)), principal)


class TestRequireRoles(unittest.TestCase):
    """require_roles dependencies translate denial into HTTP 403."""

    def test_admin_dependency_rejects_moderator(self) -> None:
        with self.assertRaises(HTTPException) as ctx:
            require_admin(current_user=_principal("moderator"))
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(ctx.exception.detail, "Insufficient permissions")

    def test_admin_dependency_admits_admin(self) -> None:
        principal = _principal("admin")
        self.assertIs(require_admin(current_user=principal), principal)

    def test_moderator_or_admin_dependency(self) -> None:
        self.assertEqual(require_moderator_or_admin(current_user=_principal("moderator")).role, "moderator")
        with self.assertRaises(HTTPException):
            require_moderator_or_admin(current_user=_principal("user"))

    def test_custom_allow_list(self) -> None:
        only_users = require_roles(Role.USER)
        self.assertEqual(only_users(current_user=_principal("user")).role, "user")
        with self.assertRaises(HTTPException):
            only_users(current_user=_principal("admin"))


if __name__ == "__main__":
    unittest.main()
