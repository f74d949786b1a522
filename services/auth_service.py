"""
Credential and token lifecycle on top of the user and token repositories.

Session tokens are signed, self-contained and short-lived.
Refresh tokens are opaque lookup keys, one live token per user:
    issued -> superseded (rotated) | revoked (deleted) | expired (kept on disk, rejected on use)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from models.refresh_token import RefreshToken
from models.repositories import TokenRepository, UserRepository
from models.user import User
from utils import security
from utils.exceptions import NotFound, Unauthenticated, Unauthorized, ValidationFailure

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password"


@dataclass(frozen=True)
class LoginResult:
    user: User
    session_token: str
    refresh_token: RefreshToken


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        tokens: TokenRepository,
        secret: str,
        issuer: str = security.DEFAULT_ISSUER,
        session_ttl: timedelta = security.SESSION_TOKEN_TTL,
        refresh_ttl: timedelta = security.REFRESH_TOKEN_TTL,
    ):
        if not secret:
            raise ValueError("a signing secret is required")
        self.users = users
        self.tokens = tokens
        self.__secret = secret
        self.issuer = issuer
        self.session_ttl = session_ttl
        self.refresh_ttl = refresh_ttl
        self.__dummy_hash = None

    # ─── Passwords ────────────────────────────────────────────────────────────
    def hash_password(self, password: str) -> str:
        if not password:
            raise ValidationFailure("Password is required")
        return security.hash_password(password)

    def verify_password(self, password_hash: str, password: str) -> None:
        """Raises Unauthorized on mismatch."""
        security.check_password(password, password_hash)

    # ─── Session tokens ───────────────────────────────────────────────────────
    def issue_session_token(self, user_id: int) -> str:
        return security.create_session_token(user_id, self.__secret, issuer=self.issuer, ttl=self.session_ttl)

    def validate_session_token(self, token: str) -> security.SessionClaims:
        if not token:
            raise Unauthenticated("Missing token")
        return security.decode_session_token(token, self.__secret, issuer=self.issuer)

    # ─── Refresh tokens ───────────────────────────────────────────────────────
    def issue_refresh_token(self) -> tuple[str, datetime]:
        return security.generate_refresh_token(self.refresh_ttl)

    def rotate_refresh_token(self, user_id: int) -> RefreshToken:
        """Mint a new refresh token for the user; the previous one stops resolving at once."""
        value, expires_at = self.issue_refresh_token()
        token = self.tokens.upsert(user_id, value, expires_at)
        logger.info("refresh token rotated for user %s", user_id)
        return token

    def lookup_refresh_token(self, value: str) -> RefreshToken:
        """Exact-value lookup. Does not check expiry."""
        return self.tokens.get_by_value(value)

    def revoke_refresh_token(self, value: str) -> None:
        self.tokens.delete_by_value(value)

    def refresh_session(self, value: str, now: datetime | None = None) -> str:
        """Trade a live refresh token for a new session token."""
        if not value:
            raise Unauthenticated("Missing refresh token")
        try:
            token = self.lookup_refresh_token(value)
        except NotFound:
            raise Unauthenticated("Invalid refresh token")
        if token.is_expired(now or datetime.now(timezone.utc)):
            logger.info("expired refresh token presented for user %s", token.owning_user_id)
            raise Unauthenticated("Refresh token has expired")
        return self.issue_session_token(token.owning_user_id)

    # ─── Account flows ────────────────────────────────────────────────────────
    def register(self, email: str, password: str) -> User:
        return self.users.create(email, self.hash_password(password))

    def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate with email and password. An unknown email and a wrong
        password fail identically, and both pay for one hash verification.
        """
        try:
            user = self.users.get_by_email(email)
        except NotFound:
            security.verify_password(password or "", self._dummy_hash())
            raise Unauthorized(INVALID_CREDENTIALS)

        self.verify_password(user.password_hash, password or "")
        session_token = self.issue_session_token(user.id)
        refresh_token = self.rotate_refresh_token(user.id)
        return LoginResult(user=user, session_token=session_token, refresh_token=refresh_token)

    def update_credentials(self, user_id: int, email: str, password: str) -> User:
        return self.users.update(user_id, email, self.hash_password(password))

    def _dummy_hash(self) -> str:
        if self.__dummy_hash is None:
            self.__dummy_hash = security.hash_password("not-a-real-password")
        return self.__dummy_hash
