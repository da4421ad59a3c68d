"""Book Resources - Library Catalog Access

Exposes book catalog data via read-only resources.

Resources:
- library://books/list - Every book in the catalog
- library://books/{book_id} - Individual book details by ID
- library://health - Liveness check with the current catalog size
"""

import logging
from typing import Any
from uuid import UUID

from fastmcp.exceptions import ResourceError
from pydantic import BaseModel, Field

from ..exceptions import LibraryError
from ..models.book import Book
from ..observability import trace_resource
from ..wiring import get_book_service

logger = logging.getLogger(__name__)


class BookListResponse(BaseModel):
    """Response schema for the catalog listing."""

    status: int = Field(default=200, description="HTTP-style status of the read")
    books: list[Book] = Field(..., description="Every book in the catalog")
    total: int = Field(..., description="Number of books returned")


@trace_resource("books.list")
async def list_books_handler() -> dict[str, Any]:
    """Returns the whole book catalog. Order is unspecified."""
    try:
        logger.debug("MCP Resource Request - books/list")
        books = get_book_service().get_all_books()
        return BookListResponse(books=books, total=len(books)).model_dump(mode="json")

    except LibraryError as e:
        logger.exception("Error in books/list resource")
        raise ResourceError(f"Failed to retrieve book list: {e!s}") from e


@trace_resource("books.detail")
async def get_book_handler(book_id: str) -> dict[str, Any]:
    """Returns details for a specific book.

    A malformed ID or an unknown book is reported as a ResourceError whose
    message starts with the matching status (400 or 404).
    """
    logger.debug("MCP Resource Request - books/%s", book_id)

    try:
        parsed_id = UUID(book_id)
    except ValueError as e:
        raise ResourceError(f"400: Invalid book ID: {book_id}") from e

    try:
        book = get_book_service().get_book_by_id(parsed_id)
    except LibraryError as e:
        logger.exception("Error in books/{book_id} resource")
        raise ResourceError(f"Failed to retrieve book details: {e!s}") from e

    if book is None:
        logger.warning("Book with ID %s not found", book_id)
        raise ResourceError(f"404: Book with ID {book_id} not found")

    return {"status": 200, "book": book.model_dump(mode="json")}


async def health_handler() -> dict[str, Any]:
    """Reports that the server is up and how many books it holds."""
    return {
        "status": 200,
        "healthy": True,
        "book_count": len(get_book_service().get_all_books()),
    }


book_resources: list[dict[str, Any]] = [
    {
        "uri": "library://books/list",
        "name": "Book Catalog",
        "description": "List every book in the library catalog.",
        "mime_type": "application/json",
        "handler": list_books_handler,
    },
    {
        "uri_template": "library://books/{book_id}",
        "name": "Book Details",
        "description": "Get detailed information about a specific book by ID",
        "mime_type": "application/json",
        "handler": get_book_handler,
    },
    {
        "uri": "library://health",
        "name": "Health",
        "description": "Liveness check reporting the number of books in the catalog",
        "mime_type": "application/json",
        "handler": health_handler,
    },
]
