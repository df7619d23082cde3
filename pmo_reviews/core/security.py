"""
Authentication and security utilities.

Passwords are stored as bcrypt hashes. Sessions are signed JWTs carrying the
caller's identity, so resolving the caller never needs a store lookup.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
import jwt

from pmo_reviews.core.config import settings
from pmo_reviews.core.constants import ID_PREFIXES
from pmo_reviews.core.exceptions import AuthenticationError

JWT_ALGORITHM = "HS256"


def generate_id(kind: str) -> str:
    """
    Generate a unique entity ID.

    Args:
        kind: Entity kind (zone, department, question, review, user)

    Returns:
        A random 12-byte hex string prefixed with the kind's prefix
    """
    return f"{ID_PREFIXES[kind]}_{secrets.token_hex(12)}"


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password for storage.

    Args:
        password: Plain text password (at most 72 bytes)
        rounds: bcrypt cost factor (defaults to the configured value)

    Returns:
        bcrypt hash as a string
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.security.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Verify a password against its stored hash.

    Returns:
        True if the password matches, False otherwise (including malformed hashes)
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored_hash.encode("utf-8"))
    except ValueError:
        return False


def create_session_token(
    claims: dict[str, Any],
    ttl_seconds: Optional[int] = None,
    secret_key: Optional[str] = None,
) -> str:
    """
    Issue a signed session token.

    Args:
        claims: Identity claims (user id as ``sub``, email, name, role)
        ttl_seconds: Token lifetime (defaults to configured session TTL)
        secret_key: Signing key (defaults to configured secret)

    Returns:
        Encoded JWT
    """
    ttl = ttl_seconds if ttl_seconds is not None else settings.security.session_ttl_seconds
    now = datetime.now(timezone.utc)
    payload = {**claims, "iat": now, "exp": now + timedelta(seconds=ttl)}
    return jwt.encode(
        payload,
        secret_key or settings.security.secret_key,
        algorithm=JWT_ALGORITHM,
    )


def verify_session_token(token: str, secret_key: Optional[str] = None) -> dict[str, Any]:
    """
    Verify a session token and return its claims.

    Raises:
        AuthenticationError: If the token is expired, malformed or tampered with
    """
    try:
        return jwt.decode(
            token,
            secret_key or settings.security.secret_key,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Session expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid session token") from e
