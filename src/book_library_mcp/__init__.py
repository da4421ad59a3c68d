"""
Book Library MCP Server Package.

A small layered CRUD service for library book records, exposed over the
Model Context Protocol and backed by an in-memory store.

Key Components:
- models: the Book entity and its circulation state machine
- database: abstract repository / unit of work and the in-memory store
- services: use-case orchestration (BookService)
- config: Configuration management with Pydantic v2
- resources: MCP resources (read-only endpoints)
- tools: MCP tools (operations with side effects)
"""

__version__ = "0.1.0"

from .exceptions import (
    DuplicateError,
    InvalidArgumentError,
    InvalidStateError,
    LibraryError,
    NotFoundError,
    OperationCancelledError,
)
from .models import Book, BookStatus

__all__ = [
    "Book",
    "BookStatus",
    "DuplicateError",
    "InvalidArgumentError",
    "InvalidStateError",
    "LibraryError",
    "NotFoundError",
    "OperationCancelledError",
    "__version__",
]
