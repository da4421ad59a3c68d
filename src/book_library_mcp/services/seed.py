"""
Sample data for the Book Library MCP Server.

A freshly started in-memory library is empty. Seeding a few well-known titles
gives MCP clients something to browse right away.
"""

import logging
from datetime import datetime

from ..exceptions import LibraryError
from .book_service import BookService

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = [
    {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "978-0132350884",
        "published_date": datetime(2008, 8, 1),
        "page_count": 464,
    },
    {
        "title": "The Pragmatic Programmer",
        "author": "Dave Thomas and Andy Hunt",
        "isbn": "978-0201616224",
        "published_date": datetime(1999, 10, 20),
        "page_count": 352,
    },
    {
        "title": "Design Patterns",
        "author": "Gang of Four",
        "isbn": "978-0201633610",
        "published_date": datetime(1994, 10, 31),
        "page_count": 395,
    },
]


def seed_sample_data(service: BookService) -> int:
    """
    Create the sample books through the service.

    A failure is logged and stops seeding; the server keeps running with
    whatever was created so far.

    Returns:
        Number of books created
    """
    logger.info("Seeding sample data...")
    created = 0

    try:
        for data in SAMPLE_BOOKS:
            service.create_book(**data)
            created += 1
    except LibraryError:
        logger.exception("Failed to seed sample data")
        return created

    logger.info("Sample data seeded successfully (%d books)", created)
    return created
