"""Unit tests for rolegate.core.security: bcrypt hashing and typed JWTs."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt

from rolegate.core.config import settings
from rolegate.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)


@patch("rolegate.core.security.BCRYPT_ROUNDS", 4)
class TestPasswordHashing(unittest.TestCase):
    """hash_password/verify_password round trip and failure modes."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("correct horse battery")
        self.assertNotEqual(hashed, "correct horse battery")
        self.assertTrue(verify_password("correct horse battery", hashed))

    def test_wrong_password_fails(self) -> None:
        hashed = hash_password("correct horse battery")
        self.assertFalse(verify_password("wrong password", hashed))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))


class TestTokens(unittest.TestCase):
    """Access and refresh tokens carry sub, role and type; types are not interchangeable."""

    def test_access_token_payload(self) -> None:
        payload = decode_token(create_access_token(sub=7, role="moderator"))
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["role"], "moderator")
        self.assertEqual(payload["type"], "access")

    def test_refresh_token_decodes_as_refresh(self) -> None:
        token = create_refresh_token(sub=7, role="user")
        payload = decode_token(token, expected_type=REFRESH_TOKEN_TYPE)
        self.assertEqual(payload["type"], "refresh")

    def test_refresh_token_rejected_as_access(self) -> None:
        with self.assertRaises(jwt.InvalidTokenError):
            decode_token(create_refresh_token(sub=7, role="user"))

    def test_access_token_rejected_as_refresh(self) -> None:
        with self.assertRaises(jwt.InvalidTokenError):
            decode_token(create_access_token(sub=7, role="user"), expected_type=REFRESH_TOKEN_TYPE)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "1", "role": "admin", "type": "access", "iat": past, "exp": past + timedelta(minutes=1)},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_token(token)

    def test_wrong_secret_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "1", "role": "admin", "type": "access"},
            "some-other-secret",
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_token(token)


if __name__ == "__main__":
    unittest.main()
