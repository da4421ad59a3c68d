"""
Book Library MCP Server Models.

This package contains the Pydantic domain models of the library:

- Book: a catalog record with its invariants and circulation state machine
- BookStatus: the circulation states a book moves through
"""

from .book import Book, BookStatus

__all__ = [
    "Book",
    "BookStatus",
]
