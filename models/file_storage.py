"""
FileStorage: the single JSON document that holds every entity.

Each operation is a whole-document cycle under the store's own lock:
    read():  shared lock   -> load -> yield document
    write(): exclusive lock -> load -> yield document -> save (only if the block succeeded)
"""
from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from marshmallow import ValidationError

from models.document import Document
from models.rwlock import ReadWriteLock
from models.schemas.document import DocumentSchema, empty_document_dict
from utils.exceptions import StorageFailure

logger = logging.getLogger(__name__)

# Mode for a newly created document file; an existing file keeps its own
DEFAULT_FILE_MODE = 0o644

T = TypeVar("T")

document_schema = DocumentSchema()


class FileStorage:
    """Owns one on-disk JSON document and the lock guarding it."""

    def __init__(self, path: str | os.PathLike):
        self.__path = os.fspath(path)
        self.__lock = ReadWriteLock()

    def reload(self):
        """Create the document file (empty collections) if it does not exist yet"""
        with self.__lock.write_locked():
            if os.path.exists(self.__path):
                return
            logger.info("creating empty document at %s", self.__path)
            self._dump_text(json.dumps(empty_document_dict(), indent=2))

    @contextmanager
    def read(self) -> Iterator[Document]:
        """Yield the current document under a shared lock. Changes are not persisted."""
        with self.__lock.read_locked():
            yield self._load()

    @contextmanager
    def write(self) -> Iterator[Document]:
        """
        Yield the current document under the exclusive lock and save it when the
        block exits normally. An exception inside the block skips the save.
        """
        with self.__lock.write_locked():
            document = self._load()
            yield document
            self._save(document)

    def with_document(self, mutate: bool, fn: Callable[[Document], T]) -> T:
        """Run fn against the document; persist afterwards if mutate is set."""
        cycle = self.write if mutate else self.read
        with cycle() as document:
            return fn(document)

    def _load(self) -> Document:
        try:
            with open(self.__path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            return Document()
        except OSError as exc:
            logger.error("could not read %s: %s", self.__path, exc)
            raise StorageFailure(f"Could not read {self.__path}") from exc

        try:
            text = raw.decode("utf-8")
            if not text.strip():
                return Document()
            return document_schema.load(json.loads(text))
        except (ValueError, ValidationError, TypeError, RecursionError) as exc:
            # UnicodeDecodeError and json.JSONDecodeError are ValueErrors; deep nesting is a RecursionError
            logger.error("malformed document at %s: %s", self.__path, exc)
            raise StorageFailure(f"Malformed document at {self.__path}") from exc

    def _save(self, document: Document):
        try:
            text = json.dumps(document_schema.dump(document), indent=2)
        except (TypeError, ValueError) as exc:
            logger.error("could not serialize document: %s", exc)
            raise StorageFailure("Could not serialize document") from exc
        self._dump_text(text)

    def _dump_text(self, text: str):
        """Write to a sibling temp file and swap it in, so readers never see half a document."""
        directory = os.path.dirname(os.path.abspath(self.__path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".chirpy-", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.chmod(tmp_path, self._target_mode())
            os.replace(tmp_path, self.__path)
        except OSError as exc:
            logger.error("could not write %s: %s", self.__path, exc)
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageFailure(f"Could not write {self.__path}") from exc

    def _target_mode(self) -> int:
        try:
            return stat.S_IMODE(os.stat(self.__path).st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE
