"""
Catalog tools for the Book Library MCP Server.

Tools are the side-effecting half of the MCP surface:
1. create_book: add a new book to the catalog
2. update_book: change the title, author and page count of a book
3. delete_book: remove a book from the catalog
4. checkout_book / return_book: move a book through its circulation states

Every response carries an HTTP-style "status" so clients can tell the
failure categories apart:
- 200 OK, 201 Created (with a "location" URI), 204 No Content
- 400 invalid input, 404 missing book, 409 duplicate or illegal transition

The handlers are the only place where library exceptions become protocol
responses; the service below them raises and never formats errors.
"""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError

from ..exceptions import (
    DuplicateError,
    InvalidArgumentError,
    InvalidStateError,
    LibraryError,
    NotFoundError,
)
from ..models.book import Book
from ..observability import trace_tool
from ..wiring import get_book_service

logger = logging.getLogger(__name__)


# =============================================================================
# INPUT SCHEMAS
# =============================================================================


class CreateBookInput(BaseModel):
    """Input schema for the create_book tool."""

    title: str = Field(..., description="Title of the book", examples=["Clean Code"])
    author: str = Field(..., description="Author of the book", examples=["Robert C. Martin"])
    isbn: str = Field(..., description="ISBN of the book", examples=["978-0132350884"])
    published_date: datetime = Field(
        ...,
        description="Publication date (ISO 8601)",
        examples=["2008-08-01", "2008-08-01T00:00:00"],
    )
    page_count: int = Field(..., description="Number of pages", examples=[464])


class UpdateBookInput(BaseModel):
    """Input schema for the update_book tool. ISBN and publication date are fixed."""

    book_id: UUID = Field(..., description="ID of the book to update")
    title: str = Field(..., description="New title")
    author: str = Field(..., description="New author")
    page_count: int = Field(..., description="New page count")


class BookIdInput(BaseModel):
    """Input schema for tools that only need a book ID."""

    book_id: UUID = Field(..., description="ID of the book")


# =============================================================================
# RESPONSE HELPERS
# =============================================================================


def book_location(book_id: UUID) -> str:
    return f"library://books/{book_id}"


def _success(status: int, message: str, book: Book | None = None) -> dict[str, Any]:
    response: dict[str, Any] = {
        "status": status,
        "content": [{"type": "text", "text": message}],
    }
    if book is not None:
        response["data"] = {"book": book.model_dump(mode="json")}
    return response


def _error(status: int, message: str) -> dict[str, Any]:
    return {
        "isError": True,
        "status": status,
        "content": [{"type": "text", "text": message}],
    }


def _error_for(e: LibraryError) -> dict[str, Any]:
    """Map a library exception onto its response category."""
    if isinstance(e, InvalidArgumentError):
        return _error(400, str(e))
    if isinstance(e, NotFoundError):
        return _error(404, str(e))
    if isinstance(e, DuplicateError | InvalidStateError):
        return _error(409, str(e))
    return _error(500, str(e))


def _invalid_input(tool_name: str, e: ValidationError) -> dict[str, Any]:
    logger.warning("Invalid %s parameters: %s", tool_name, e)
    return _error(400, f"Invalid {tool_name} parameters: {e}")


# =============================================================================
# HANDLERS
# =============================================================================


@trace_tool("create_book")
async def create_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the create_book tool.

    Returns 201 with the created book and its resource URI, 400 when the
    data is rejected, 409 on an ID collision.
    """
    try:
        params = CreateBookInput.model_validate(arguments)
    except ValidationError as e:
        return _invalid_input("create_book", e)

    try:
        book = get_book_service().create_book(
            params.title,
            params.author,
            params.isbn,
            params.published_date,
            params.page_count,
        )
    except LibraryError as e:
        logger.info("create_book failed: %s", e)
        return _error_for(e)
    except Exception as e:
        logger.exception("Unexpected error in create_book tool")
        return _error(500, f"An unexpected error occurred: {e!s}")

    response = _success(201, f"Created book '{book.title}' with ID {book.id}", book)
    response["location"] = book_location(book.id)
    return response


@trace_tool("update_book")
async def update_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the update_book tool.

    Returns 200 with the updated book, 404 if it does not exist, 400 when
    the new details are rejected.
    """
    try:
        params = UpdateBookInput.model_validate(arguments)
    except ValidationError as e:
        return _invalid_input("update_book", e)

    try:
        book = get_book_service().update_book(
            params.book_id, params.title, params.author, params.page_count
        )
    except LibraryError as e:
        logger.info("update_book failed: %s", e)
        return _error_for(e)
    except Exception as e:
        logger.exception("Unexpected error in update_book tool")
        return _error(500, f"An unexpected error occurred: {e!s}")

    return _success(200, f"Updated book '{book.title}'", book)


@trace_tool("delete_book")
async def delete_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the delete_book tool. Returns 204, or 404 if the book does not exist."""
    try:
        params = BookIdInput.model_validate(arguments)
    except ValidationError as e:
        return _invalid_input("delete_book", e)

    try:
        get_book_service().delete_book(params.book_id)
    except LibraryError as e:
        logger.info("delete_book failed: %s", e)
        return _error_for(e)
    except Exception as e:
        logger.exception("Unexpected error in delete_book tool")
        return _error(500, f"An unexpected error occurred: {e!s}")

    return _success(204, f"Deleted book {params.book_id}")


@trace_tool("checkout_book")
async def checkout_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the checkout_book tool. Returns 409 if the book is not available."""
    try:
        params = BookIdInput.model_validate(arguments)
    except ValidationError as e:
        return _invalid_input("checkout_book", e)

    try:
        book = get_book_service().checkout_book(params.book_id)
    except LibraryError as e:
        logger.info("checkout_book failed: %s", e)
        return _error_for(e)
    except Exception as e:
        logger.exception("Unexpected error in checkout_book tool")
        return _error(500, f"An unexpected error occurred: {e!s}")

    return _success(200, f"Checked out book '{book.title}'", book)


@trace_tool("return_book")
async def return_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the return_book tool. Returns 409 if the book is not checked out."""
    try:
        params = BookIdInput.model_validate(arguments)
    except ValidationError as e:
        return _invalid_input("return_book", e)

    try:
        book = get_book_service().return_book(params.book_id)
    except LibraryError as e:
        logger.info("return_book failed: %s", e)
        return _error_for(e)
    except Exception as e:
        logger.exception("Unexpected error in return_book tool")
        return _error(500, f"An unexpected error occurred: {e!s}")

    return _success(200, f"Returned book '{book.title}'", book)


# =============================================================================
# TOOL DEFINITIONS
# =============================================================================

# FastMCP derives the published schema from the handler signature; the
# handlers validate "arguments" against the input models above.

create_book = {
    "name": "create_book",
    "description": (
        "Add a new book to the catalog. Title, author and ISBN must not be blank and "
        "the page count must be positive. The book starts out available."
    ),
    "handler": create_book_handler,
}

update_book = {
    "name": "update_book",
    "description": (
        "Change the title, author and page count of an existing book. "
        "The ISBN and publication date cannot be changed."
    ),
    "handler": update_book_handler,
}

delete_book = {
    "name": "delete_book",
    "description": "Remove a book from the catalog.",
    "handler": delete_book_handler,
}

checkout_book = {
    "name": "checkout_book",
    "description": "Check out an available book.",
    "handler": checkout_book_handler,
}

return_book = {
    "name": "return_book",
    "description": "Return a checked out book so it becomes available again.",
    "handler": return_book_handler,
}

book_tools: list[dict[str, Any]] = [
    create_book,
    update_book,
    delete_book,
    checkout_book,
    return_book,
]
