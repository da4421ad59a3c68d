"""
Book service for the Book Library MCP Server.

The service is the use-case layer between the MCP handlers and storage. It is
the only component that sequences several repository calls and decides when
to commit. Each mutating use case:

1. Takes the per-key lock for the book it touches
2. Reads the current state through the repository
3. Applies the change through the Book's own behaviour methods
4. Writes the result back and commits the unit of work

The cancellation signal is last consulted by the repository write itself.
Once that write has landed the commit runs without the signal, so a caller
that sees OperationCancelledError knows nothing was changed.

Holding the key lock across the whole read-modify-write means an update that
races a delete either finishes first or sees the book is gone; it never
writes a deleted book back into the store.

The service holds no mutable state of its own. Its collaborators (unit of
work and logger) are passed in by whoever builds it.
"""

import logging
from datetime import datetime
from uuid import UUID

from ..database.repository import CancellationSignal, UnitOfWork
from ..exceptions import InvalidArgumentError, InvalidStateError, NotFoundError
from ..models.book import Book


class BookService:
    """Use cases for managing the book catalog."""

    def __init__(self, unit_of_work: UnitOfWork, logger: logging.Logger | None = None):
        if unit_of_work is None:
            raise ValueError("A unit of work is required")
        self._uow = unit_of_work
        self._logger = logger or logging.getLogger(__name__)

    def create_book(
        self,
        title: str,
        author: str,
        isbn: str,
        published_date: datetime,
        page_count: int,
        cancel: CancellationSignal | None = None,
    ) -> Book:
        """
        Create a book and add it to the catalog.

        Raises:
            InvalidArgumentError: If the book data violates an invariant
            DuplicateError: If the generated ID is already stored
            OperationCancelledError: If cancelled before the book was stored
        """
        self._logger.info("Creating new book with title: %s", title)

        try:
            book = Book.create(title, author, isbn, published_date, page_count)
        except InvalidArgumentError as e:
            self._logger.warning("Rejected book data for '%s': %s", title, e)
            raise

        created = self._uow.books.add(book, cancel)
        self._uow.save_changes()

        self._logger.info("Successfully created book with ID: %s", created.id)
        return created

    def get_book_by_id(
        self, book_id: UUID, cancel: CancellationSignal | None = None
    ) -> Book | None:
        """Return the book or None if it does not exist."""
        self._logger.debug("Retrieving book with ID: %s", book_id)
        return self._uow.books.get_by_id(book_id, cancel)

    def get_all_books(self, cancel: CancellationSignal | None = None) -> list[Book]:
        self._logger.debug("Retrieving all books")
        return self._uow.books.get_all(cancel)

    def update_book(
        self,
        book_id: UUID,
        title: str,
        author: str,
        page_count: int,
        cancel: CancellationSignal | None = None,
    ) -> Book:
        """
        Update the title, author and page count of a book.

        Raises:
            NotFoundError: If the book does not exist
            InvalidArgumentError: If the new details violate an invariant
        """
        self._logger.info("Updating book with ID: %s", book_id)

        with self._uow.books.lock(book_id):
            book = self._require_book(book_id, "update", cancel)

            try:
                book.update_details(title, author, page_count)
            except InvalidArgumentError as e:
                self._logger.warning("Rejected update for book %s: %s", book_id, e)
                raise

            updated = self._uow.books.update(book, cancel)
            self._uow.save_changes()

        self._logger.info("Successfully updated book with ID: %s", book_id)
        return updated

    def delete_book(self, book_id: UUID, cancel: CancellationSignal | None = None) -> None:
        """
        Remove a book from the catalog.

        Raises:
            NotFoundError: If the book does not exist
        """
        self._logger.info("Deleting book with ID: %s", book_id)

        with self._uow.books.lock(book_id):
            self._require_book(book_id, "delete", cancel)
            self._uow.books.delete(book_id, cancel)
            self._uow.save_changes()

        self._logger.info("Successfully deleted book with ID: %s", book_id)

    def checkout_book(self, book_id: UUID, cancel: CancellationSignal | None = None) -> Book:
        """
        Check out an available book.

        Raises:
            NotFoundError: If the book does not exist
            InvalidStateError: If the book is not available
        """
        self._logger.info("Checking out book with ID: %s", book_id)

        with self._uow.books.lock(book_id):
            book = self._require_book(book_id, "check out", cancel)

            try:
                book.mark_as_checked_out()
            except InvalidStateError as e:
                self._logger.warning("Checkout refused for book %s: %s", book_id, e)
                raise

            updated = self._uow.books.update(book, cancel)
            self._uow.save_changes()

        self._logger.info("Successfully checked out book with ID: %s", book_id)
        return updated

    def return_book(self, book_id: UUID, cancel: CancellationSignal | None = None) -> Book:
        """
        Return a checked out book.

        Raises:
            NotFoundError: If the book does not exist
            InvalidStateError: If the book is not checked out
        """
        self._logger.info("Returning book with ID: %s", book_id)

        with self._uow.books.lock(book_id):
            book = self._require_book(book_id, "return", cancel)

            try:
                book.mark_as_returned()
            except InvalidStateError as e:
                self._logger.warning("Return refused for book %s: %s", book_id, e)
                raise

            updated = self._uow.books.update(book, cancel)
            self._uow.save_changes()

        self._logger.info("Successfully returned book with ID: %s", book_id)
        return updated

    def _require_book(
        self, book_id: UUID, action: str, cancel: CancellationSignal | None
    ) -> Book:
        book = self._uow.books.get_by_id(book_id, cancel)
        if book is None:
            self._logger.warning("Attempted to %s non-existent book with ID: %s", action, book_id)
            raise NotFoundError(f"Book with ID {book_id} not found")
        return book
