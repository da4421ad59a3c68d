"""
Service layer for the Book Library MCP Server.

Services hold the use cases. They depend on the abstract storage
capabilities in database.repository, never on a concrete store.
"""

from .book_service import BookService
from .seed import SAMPLE_BOOKS, seed_sample_data

__all__ = [
    "SAMPLE_BOOKS",
    "BookService",
    "seed_sample_data",
]
