from __future__ import annotations

import logging
from datetime import datetime

from models.file_storage import FileStorage
from models.refresh_token import RefreshToken
from utils.exceptions import NotFound

logger = logging.getLogger(__name__)


class TokenRepository:
    """
    Refresh-token rows keyed by user: at most one live token per user.
    Lookups do not look at expires_at; that is left to the caller.
    """

    def __init__(self, storage: FileStorage):
        self.storage = storage

    def upsert(self, user_id: int, value: str, expires_at: datetime) -> RefreshToken:
        """Store value as the user's refresh token, replacing any previous one."""
        token = RefreshToken(owning_user_id=user_id, opaque_value=value, expires_at=expires_at)
        with self.storage.write() as doc:
            replaced = user_id in doc.tokens
            doc.tokens[user_id] = token

        logger.debug("refresh token for user %s %s", user_id, "replaced" if replaced else "stored")
        return token

    def get_by_value(self, value: str) -> RefreshToken:
        with self.storage.read() as doc:
            for token in doc.tokens.values():
                if token.opaque_value == value:
                    return token
        raise NotFound("Refresh token")

    def delete_by_value(self, value: str) -> None:
        with self.storage.write() as doc:
            for user_id, token in doc.tokens.items():
                if token.opaque_value == value:
                    del doc.tokens[user_id]
                    break
            else:
                raise NotFound("Refresh token")

        logger.info("refresh token for user %s revoked", user_id)
