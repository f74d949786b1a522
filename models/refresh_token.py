"""
RefreshToken: the single live refresh token of a user.
Fields:
- owning_user_id (int) - key of the row in Document.tokens
- opaque_value (str) - 64 hex chars, a lookup key with no embedded claims
- expires_at (aware datetime, UTC)
"""
from datetime import datetime, timezone

from models.base_model import BaseModel


class RefreshToken(BaseModel):
    __fields__ = ("owning_user_id", "opaque_value", "expires_at")

    owning_user_id: int = None
    opaque_value: str = None
    expires_at: datetime = None

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return self.expires_at is None or self.expires_at <= now

    def __repr__(self):
        return f"<RefreshToken user={self.owning_user_id} expires_at={self.expires_at}>"
