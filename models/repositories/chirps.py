"""
Chirp repository.

- create(): length check, profanity mask, ID from the persisted sequence
- list(): optional author filter, ascending (default) or descending by ID
- get() / delete(): delete is restricted to the chirp's author
"""
from __future__ import annotations

import logging
from typing import List, Optional

from models.chirp import Chirp
from models.file_storage import FileStorage
from utils.exceptions import NotFound, Unauthorized, ValidationFailure

logger = logging.getLogger(__name__)

MAX_CHIRP_LENGTH = 140
BLOCKED_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"
SORT_ORDERS = ("asc", "desc")


def clean_body(body: str) -> str:
    """Mask blocked words. Matching is per space-separated token and case-insensitive."""
    return " ".join(MASK if word.lower() in BLOCKED_WORDS else word for word in body.split(" "))


class ChirpRepository:
    def __init__(self, storage: FileStorage):
        self.storage = storage

    def create(self, body: str, author_id: int) -> Chirp:
        if not isinstance(body, str):
            raise ValidationFailure("Chirp body is required")
        if len(body) > MAX_CHIRP_LENGTH:
            raise ValidationFailure("Chirp is too long")

        cleaned = clean_body(body)
        with self.storage.write() as doc:
            chirp = Chirp(id=doc.allocate_id("chirps"), body=cleaned, author_id=author_id)
            doc.chirps[chirp.id] = chirp

        logger.info("chirp %s created by user %s", chirp.id, author_id)
        return chirp

    def list(self, author_id: Optional[int] = None, sort: str = "asc") -> List[Chirp]:
        sort = (sort or "asc").lower()
        if sort not in SORT_ORDERS:
            raise ValidationFailure(f"Unsupported sort order: {sort}. Allowed: asc, desc")

        with self.storage.read() as doc:
            chirps = list(doc.chirps.values())

        if author_id is not None:
            chirps = [c for c in chirps if c.author_id == author_id]
        chirps.sort(key=lambda c: c.id, reverse=(sort == "desc"))
        return chirps

    def get(self, chirp_id: int) -> Chirp:
        with self.storage.read() as doc:
            chirp = doc.chirps.get(chirp_id)
        if chirp is None:
            raise NotFound("Chirp")
        return chirp

    def delete(self, chirp_id: int, requester_id: int) -> None:
        with self.storage.write() as doc:
            chirp = doc.chirps.get(chirp_id)
            if chirp is None:
                raise NotFound("Chirp")
            if chirp.author_id != requester_id:
                raise Unauthorized("Only the author can delete this chirp")
            del doc.chirps[chirp_id]

        logger.info("chirp %s deleted by user %s", chirp_id, requester_id)
