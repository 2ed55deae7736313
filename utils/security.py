"""
Security utilities for authentication.

Passwords are hashed with bcrypt through passlib; access tokens are
HS256 JWTs carrying the user id (``sub``) and role.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from config.settings import settings

ACCESS_TOKEN_TYPE = "access"

# bcrypt ignores everything past 72 bytes
BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.auth.bcrypt_rounds,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(
    subject: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token.

    Args:
        subject: User ID
        role: User role at issue time
        expires_delta: Lifetime; defaults to the configured token lifetime

    Returns:
        Encoded JWT
    """
    lifetime = expires_delta or timedelta(minutes=settings.auth.access_token_expire_minutes)
    claims: dict[str, Any] = {
        "sub": subject,
        "role": role,
        "type": ACCESS_TOKEN_TYPE,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(
        claims,
        settings.auth.secret_key.get_secret_value(),
        algorithm=settings.auth.algorithm,
    )


def decode_access_token(token: str) -> dict[str, Any] | None:
    """
    Verify an access token.

    Returns:
        The claims, or None when the signature, expiry, type or subject
        does not check out
    """
    try:
        claims = jwt.decode(
            token,
            settings.auth.secret_key.get_secret_value(),
            algorithms=[settings.auth.algorithm],
        )
    except JWTError:
        return None

    if claims.get("type") != ACCESS_TOKEN_TYPE or not claims.get("sub"):
        return None
    return claims


def validate_password_strength(password: str) -> tuple[bool, list[str]]:
    """
    Validate password meets security requirements.

    Returns:
        Tuple of (is_valid, list of issues)
    """
    issues = []

    if len(password) < settings.auth.password_min_length:
        issues.append(
            f"Password must be at least {settings.auth.password_min_length} characters"
        )

    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        issues.append(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")

    return len(issues) == 0, issues
