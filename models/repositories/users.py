from __future__ import annotations

import logging

from models.file_storage import FileStorage
from models.user import User
from utils.exceptions import Conflict, NotFound

logger = logging.getLogger(__name__)


def _find_by_email(users, email: str):
    for user in users.values():
        if user.email == email:
            return user
    return None


class UserRepository:
    """Users are created once per email, updated in place and never deleted."""

    def __init__(self, storage: FileStorage):
        self.storage = storage

    def create(self, email: str, password_hash: str) -> User:
        with self.storage.write() as doc:
            if _find_by_email(doc.users, email) is not None:
                raise Conflict("Email already registered")
            user = User(
                id=doc.allocate_id("users"),
                email=email,
                password_hash=password_hash,
                is_upgraded=False,
            )
            doc.users[user.id] = user

        logger.info("user %s created", user.id)
        return user

    def get(self, user_id: int) -> User:
        with self.storage.read() as doc:
            user = doc.users.get(user_id)
        if user is None:
            raise NotFound("User")
        return user

    def get_by_email(self, email: str) -> User:
        with self.storage.read() as doc:
            user = _find_by_email(doc.users, email)
        if user is None:
            raise NotFound("User")
        return user

    def update(self, user_id: int, email: str, password_hash: str) -> User:
        with self.storage.write() as doc:
            user = doc.users.get(user_id)
            if user is None:
                raise NotFound("User")
            owner = _find_by_email(doc.users, email)
            if owner is not None and owner.id != user_id:
                raise Conflict("Email already registered")
            user.email = email
            user.password_hash = password_hash

        logger.info("user %s updated", user_id)
        return user

    def upgrade(self, user_id: int) -> User:
        with self.storage.write() as doc:
            user = doc.users.get(user_id)
            if user is None:
                raise NotFound("User")
            user.is_upgraded = True

        logger.info("user %s upgraded", user_id)
        return user
