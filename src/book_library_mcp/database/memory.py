"""
In-memory storage for the Book Library MCP Server.

The store lives for the lifetime of the process and is shared by every
request the server handles. Concurrent MCP requests run as independent tasks,
so every access goes through two kinds of locks:

1. **Per-key locks** (reentrant): serialize operations on the same book so
   check-then-act sequences (add, update, delete) are atomic for that key.
   They are reference counted and dropped once the last holder leaves
2. **A short store guard**: protects the dictionary structure itself and is
   only held for a single lookup, insert or removal

Operations on different books never wait on each other beyond the store guard.
Stored books are private copies; every read returns a fresh copy.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

from ..exceptions import DuplicateError, NotFoundError
from ..models.book import Book
from .repository import BookRepository, CancellationSignal, UnitOfWork, raise_if_cancelled

logger = logging.getLogger(__name__)


class _KeyLock:
    """A per-key lock and the number of callers holding or waiting on it."""

    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.holders = 0


class InMemoryBookRepository(BookRepository):
    """Book repository backed by a process-local dictionary."""

    def __init__(self) -> None:
        self._books: dict[UUID, Book] = {}
        # Entries live only while some caller holds or waits on the key
        self._key_locks: dict[UUID, _KeyLock] = {}
        self._guard = threading.Lock()

    @contextmanager
    def lock(self, book_id: UUID) -> Iterator[None]:
        with self._guard:
            entry = self._key_locks.get(book_id)
            if entry is None:
                entry = self._key_locks[book_id] = _KeyLock()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._key_locks[book_id]

    def get_by_id(self, book_id: UUID, cancel: CancellationSignal | None = None) -> Book | None:
        raise_if_cancelled(cancel, "get_by_id")
        with self._guard:
            book = self._books.get(book_id)
        if book is None:
            return None
        return book.model_copy(deep=True)

    def get_all(self, cancel: CancellationSignal | None = None) -> list[Book]:
        raise_if_cancelled(cancel, "get_all")
        with self._guard:
            snapshot = list(self._books.values())
        return [book.model_copy(deep=True) for book in snapshot]

    def add(self, book: Book, cancel: CancellationSignal | None = None) -> Book:
        raise_if_cancelled(cancel, "add")
        stored = book.model_copy(deep=True)

        with self.lock(book.id):
            raise_if_cancelled(cancel, "add")
            with self._guard:
                if book.id in self._books:
                    raise DuplicateError(f"Book with ID {book.id} already exists")
                self._books[book.id] = stored

        logger.debug("Stored book %s", book.id)
        return stored.model_copy(deep=True)

    def update(self, book: Book, cancel: CancellationSignal | None = None) -> Book:
        raise_if_cancelled(cancel, "update")
        stored = book.model_copy(deep=True)

        with self.lock(book.id):
            raise_if_cancelled(cancel, "update")
            with self._guard:
                if book.id not in self._books:
                    raise NotFoundError(f"Book with ID {book.id} not found")
                self._books[book.id] = stored

        logger.debug("Replaced book %s", book.id)
        return stored.model_copy(deep=True)

    def delete(self, book_id: UUID, cancel: CancellationSignal | None = None) -> None:
        raise_if_cancelled(cancel, "delete")

        with self.lock(book_id):
            raise_if_cancelled(cancel, "delete")
            with self._guard:
                if self._books.pop(book_id, None) is None:
                    raise NotFoundError(f"Book with ID {book_id} not found")

        logger.debug("Removed book %s", book_id)

    def count(self) -> int:
        with self._guard:
            return len(self._books)


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of work over an in-memory repository.

    Writes are visible as soon as the repository call returns, so committing
    has nothing left to flush.
    """

    def __init__(self, books: BookRepository):
        if books is None:
            raise ValueError("A book repository is required")
        self._books = books

    @property
    def books(self) -> BookRepository:
        return self._books

    def save_changes(self, cancel: CancellationSignal | None = None) -> int:
        raise_if_cancelled(cancel, "save_changes")
        return 1
