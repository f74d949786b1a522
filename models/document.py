"""
The Document aggregate: every entity of the service in one snapshot.
It is loaded whole and, when mutated, written back whole by FileStorage.
"""
from __future__ import annotations

from models.chirp import Chirp
from models.refresh_token import RefreshToken
from models.user import User

# Collections that draw IDs from a persisted counter
SEQUENCES = ("chirps", "users")


class Document:
    def __init__(self, chirps=None, users=None, tokens=None, next_ids=None):
        self.chirps: dict[int, Chirp] = dict(chirps or {})
        self.users: dict[int, User] = dict(users or {})
        self.tokens: dict[int, RefreshToken] = dict(tokens or {})
        self.next_ids: dict[str, int] = {}
        for name in SEQUENCES:
            floor = max(getattr(self, name).keys(), default=0) + 1
            self.next_ids[name] = max(int((next_ids or {}).get(name, 1)), floor)

    def allocate_id(self, collection: str) -> int:
        """Hand out the next ID of a collection. IDs are never reused, even after deletes."""
        if collection not in self.next_ids:
            raise KeyError(f"{collection} has no ID sequence")
        new_id = self.next_ids[collection]
        self.next_ids[collection] = new_id + 1
        return new_id

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return (
            self.chirps == other.chirps
            and self.users == other.users
            and self.tokens == other.tokens
            and self.next_ids == other.next_ids
        )

    __hash__ = None

    def __repr__(self):
        return (
            f"<Document chirps={len(self.chirps)} users={len(self.users)} "
            f"tokens={len(self.tokens)} next_ids={self.next_ids}>"
        )
