"""
security helpers:
- Argon2 password hashing via argon2-cffi
- Session token (JWT, HS256) creation/verification via PyJWT
- Opaque refresh token generation
"""
from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from utils.exceptions import Unauthenticated, Unauthorized

ph = PasswordHasher()

JWT_ALGORITHM = "HS256"
DEFAULT_ISSUER = "chirpy"
SESSION_TOKEN_TTL = timedelta(seconds=360)
REFRESH_TOKEN_TTL = timedelta(days=60)
REFRESH_TOKEN_BYTES = 32


@dataclass(frozen=True)
class SessionClaims:
    subject: int
    issuer: str
    issued_at: datetime
    expires_at: datetime


def _now() -> datetime:
    return datetime.now(timezone.utc)


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password using argon2
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def check_password(password: str, password_hash: str) -> None:
    """Like verify_password, but a mismatch raises Unauthorized."""
    if not verify_password(password, password_hash):
        raise Unauthorized("Incorrect email or password")


def create_session_token(
    user_id: int,
    secret: str,
    issuer: str = DEFAULT_ISSUER,
    ttl: timedelta = SESSION_TOKEN_TTL,
    now: datetime | None = None,
) -> str:
    """Sign a short-lived token asserting sub=user_id."""
    now = now or _now()
    payload = {
        "iss": issuer,
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_session_token(token: str, secret: str, issuer: str = DEFAULT_ISSUER) -> SessionClaims:
    """
    Verify signature, issuer and expiry and return the typed claims.
    Every failure surfaces as Unauthenticated.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            issuer=issuer,
            options={"require": ["exp", "iat", "iss", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token expired")
    except jwt.InvalidTokenError as exc:
        raise Unauthenticated(f"Invalid token: {exc}")

    try:
        subject = int(decoded["sub"])
    except (TypeError, ValueError):
        raise Unauthenticated("Invalid token: malformed subject")

    return SessionClaims(
        subject=subject,
        issuer=decoded["iss"],
        issued_at=datetime.fromtimestamp(decoded["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(decoded["exp"], tz=timezone.utc),
    )


def generate_refresh_token(ttl: timedelta = REFRESH_TOKEN_TTL, now: datetime | None = None) -> tuple[str, datetime]:
    """
    Create an opaque refresh token.
    Returns (hex_value, expires_at); the value carries no claims.
    """
    now = now or _now()
    return secrets.token_hex(REFRESH_TOKEN_BYTES), now + ttl
