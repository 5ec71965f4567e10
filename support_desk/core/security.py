"""Password hashing and JWT helpers."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    claims: dict[str, Any],
    *,
    secret: str,
    algorithm: str,
    expires_delta: timedelta,
) -> str:
    """Sign ``claims`` with ``iat`` and ``exp`` added.

    A non-positive ``expires_delta`` yields a token that is already expired.
    """
    issued_at = datetime.now(UTC)
    to_encode = {
        **claims,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def decode_access_token(token: str, *, secret: str, algorithm: str) -> dict[str, Any]:
    """Verify signature and expiry; raises ``jose.JWTError`` on failure."""
    return jwt.decode(token, secret, algorithms=[algorithm])
