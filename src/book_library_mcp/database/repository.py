"""
Repository pattern implementation for the Book Library MCP Server.

This module defines the storage capabilities the service layer depends on.
The service only ever sees these abstract classes, so the in-memory store can
be swapped for a persistent one without touching the use cases:

1. **BookRepository**: keyed storage of Book entities
2. **UnitOfWork**: transactional boundary that exposes the repository and
   a single commit point (save_changes)

Every operation accepts an optional cancellation signal. A signal that is
already set makes the operation raise OperationCancelledError before any
state changes.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import AbstractContextManager
from typing import Protocol
from uuid import UUID

from ..exceptions import OperationCancelledError
from ..models.book import Book


class CancellationSignal(Protocol):
    """Anything with an is_set() flag, typically a threading.Event."""

    def is_set(self) -> bool: ...


def raise_if_cancelled(cancel: CancellationSignal | None, operation: str) -> None:
    """Abort before mutating anything if the caller already gave up."""
    if cancel is not None and cancel.is_set():
        raise OperationCancelledError(f"Operation '{operation}' was cancelled")


class BookRepository(ABC):
    """
    Abstract repository for book data access.

    Implementations own the canonical copy of each book. Lookups return
    copies, so callers must come back through update() to change state.
    """

    @abstractmethod
    def get_by_id(self, book_id: UUID, cancel: CancellationSignal | None = None) -> Book | None:
        """
        Get a book by ID.

        Returns:
            The stored book or None if not found
        """

    @abstractmethod
    def get_all(self, cancel: CancellationSignal | None = None) -> list[Book]:
        """Get a point-in-time snapshot of every stored book. Order is unspecified."""

    @abstractmethod
    def add(self, book: Book, cancel: CancellationSignal | None = None) -> Book:
        """
        Store a new book.

        Raises:
            DuplicateError: If a book with the same ID is already stored
        """

    @abstractmethod
    def update(self, book: Book, cancel: CancellationSignal | None = None) -> Book:
        """
        Replace a stored book.

        Raises:
            NotFoundError: If no book with book.id is stored
        """

    @abstractmethod
    def delete(self, book_id: UUID, cancel: CancellationSignal | None = None) -> None:
        """
        Remove a stored book.

        Raises:
            NotFoundError: If no book with book_id is stored
        """

    @abstractmethod
    def lock(self, book_id: UUID) -> AbstractContextManager[None]:
        """
        Hold the lock for one key.

        Repository calls on the same key made while the lock is held by the
        current caller do not block, so a read-modify-write sequence can run
        inside it atomically.
        """

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored books."""

    def __iter__(self) -> Iterator[Book]:
        return iter(self.get_all())


class UnitOfWork(ABC):
    """
    Transactional boundary for a use case.

    save_changes() is the commit point. Stores that apply writes immediately
    implement it as a no-op; buffered stores flush their pending writes there.
    """

    @property
    @abstractmethod
    def books(self) -> BookRepository:
        """Return the book repository for this unit of work."""

    @abstractmethod
    def save_changes(self, cancel: CancellationSignal | None = None) -> int:
        """
        Commit pending changes.

        Returns:
            A positive number on success
        """
