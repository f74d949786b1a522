#!/usr/bin/env python3
"""
Shared base for the entities held in the JSON document.

- kwargs-driven __init__ so schemas and repositories can build entities the same way
- value equality, so a reloaded document compares equal to the one that was saved
- to_dict() for logging and debugging; password hashes are dropped unless asked for
"""

from __future__ import annotations

from datetime import datetime


class BaseModel:
    """
    Base for all persistent entities.

    Subclasses list their persisted attributes in __fields__; anything not
    passed to __init__ falls back to the class-level default.
    """

    __fields__: tuple[str, ...] = ()

    def __init__(self, *args, **kwargs):
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)

    def __str__(self) -> str:
        return f"[{self.__class__.__name__}] {self.to_dict()}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return all(getattr(self, f, None) == getattr(other, f, None) for f in self.__fields__)

    __hash__ = None

    def to_dict(self, save_fs=None) -> dict:
        """
        Return the persisted fields as a plain dict.
        Datetimes are rendered as ISO-8601 strings; password_hash is removed
        unless save_fs is given.
        """
        d = {f: getattr(self, f, None) for f in self.__fields__}
        for key, value in d.items():
            if isinstance(value, datetime):
                d[key] = value.isoformat()
        d["__class__"] = self.__class__.__name__

        if save_fs is None and "password_hash" in d:
            del d["password_hash"]

        return d
