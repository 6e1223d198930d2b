"""Password hashing and credential token utilities."""

import hashlib
import os
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from pwdlib import PasswordHash

# Argon2 (modern, GPU-resistant)
password_hash = PasswordHash.recommended()

JWT_ALGORITHM = "HS256"

# Login tokens live as long as the credential cookie
LOGIN_TOKEN_TTL = timedelta(days=90)
REFRESH_TOKEN_TTL = timedelta(days=7)
REGISTER_TOKEN_TTL = timedelta(days=7)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify plain password against hashed password."""
    return password_hash.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    """Hash password using Argon2."""
    return password_hash.hash(password)


def get_jwt_secret() -> str:
    return os.getenv("JWT_SECRET", "dev-jwt-secret-change-in-production")


def create_access_token(claims: dict[str, Any], expires_in: timedelta) -> str:
    """Sign a credential token carrying ``claims`` that expires after ``expires_in``."""
    now = datetime.now(timezone.utc)
    payload = {**claims, "iat": now, "exp": now + expires_in}
    return jwt.encode(payload, get_jwt_secret(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the token claims.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, forged or expired
    """
    return jwt.decode(token, get_jwt_secret(), algorithms=[JWT_ALGORITHM])


def read_token_claims(token: str) -> dict[str, Any]:
    """
    Read claims without verifying the signature.

    Used by the client, which holds the token but not the signing secret.
    Expiry is left for the caller to judge.

    Raises:
        jwt.InvalidTokenError: If the token cannot be decoded
    """
    return jwt.decode(
        token,
        options={"verify_signature": False, "verify_exp": False},
        algorithms=[JWT_ALGORITHM],
    )


PASSWORD_RESET_TTL = timedelta(hours=1)
PASSWORD_RESET_PURPOSE = "password_reset"


def password_fingerprint(hashed_password: str) -> str:
    """Short digest of the stored hash; changes whenever the password does."""
    return hashlib.sha256(hashed_password.encode()).hexdigest()[:16]


def create_password_reset_token(user_id: int, hashed_password: str) -> str:
    """
    Sign a one-hour reset token for ``user_id``.

    The token carries a fingerprint of the current password hash, so it stops
    working once the password has been changed with it.
    """
    return create_access_token(
        {
            "userId": user_id,
            "purpose": PASSWORD_RESET_PURPOSE,
            "fp": password_fingerprint(hashed_password),
        },
        PASSWORD_RESET_TTL,
    )


def decode_password_reset_token(token: str) -> tuple[int, str]:
    """
    Verify a reset token and return ``(user_id, fingerprint)``.

    Raises:
        jwt.InvalidTokenError: If the token is forged, expired or not a reset token
    """
    claims = decode_access_token(token)
    user_id = claims.get("userId")
    if claims.get("purpose") != PASSWORD_RESET_PURPOSE or not isinstance(user_id, int):
        raise jwt.InvalidTokenError("Not a password reset token")
    return user_id, str(claims.get("fp", ""))
