"""Credential handling: bcrypt password hashes and signed login tokens."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from docuploader.core.config import settings

BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    """Salted bcrypt hash of plain_password, as stored in users.password."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """False for a wrong password or a value that is not a bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str | int, roles: list[str]) -> str:
    """Signed JWT for user id sub carrying the user's role names."""
    issued_at = datetime.now(UTC)
    claims: dict[str, Any] = {
        "sub": str(sub),
        "roles": list(roles),
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    }
    return jwt.encode(
        claims,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims (sub, roles, iat, exp).
    Raises jwt.PyJWTError when the token is not acceptable.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
    )
