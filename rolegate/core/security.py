"""Password hashing and JWT access/refresh token handling."""

from datetime import UTC, datetime, timedelta
from typing import Any, Literal

import bcrypt
import jwt

from rolegate.core.config import settings

# Bcrypt cost (rounds).
BCRYPT_ROUNDS = 12

NAME_MIN_LEN = 1
NAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

TokenType = Literal["access", "refresh"]
ACCESS_TOKEN_TYPE: TokenType = "access"
REFRESH_TOKEN_TYPE: TokenType = "refresh"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage."""
    # bcrypt only looks at the first 72 bytes.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _create_token(sub: str | int, role: str, token_type: TokenType, expires_in: timedelta) -> str:
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "type": token_type,
        "exp": now + expires_in,
        "iat": now,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def create_access_token(sub: str | int, role: str) -> str:
    """Create a short-lived access token with sub (user id), role, type and exp."""
    return _create_token(
        sub, role, ACCESS_TOKEN_TYPE, timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    )


def create_refresh_token(sub: str | int, role: str) -> str:
    """Create a long-lived refresh token; only accepted by POST /auth/refresh."""
    return _create_token(
        sub, role, REFRESH_TOKEN_TYPE, timedelta(minutes=settings.JWT_REFRESH_EXPIRE_MINUTES)
    )


def decode_token(token: str, expected_type: TokenType = ACCESS_TOKEN_TYPE) -> dict[str, Any]:
    """
    Decode and validate a JWT; return payload (sub, role, type, exp, iat).

    Raises jwt.PyJWTError on an invalid or expired token, or when the token
    type does not match expected_type.
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
    )
    if payload.get("type") != expected_type:
        raise jwt.InvalidTokenError(f"Expected {expected_type} token")
    return payload
