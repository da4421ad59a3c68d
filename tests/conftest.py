"""Test configuration and fixtures for Book Library MCP Server.

Fixtures here give every test:
1. A fresh in-memory store - no state leaks between tests
2. Configuration overrides isolated from the developer's environment
3. A service installed as the process-wide instance so MCP handlers use it
"""

import logging
import os
from collections.abc import Generator
from datetime import datetime

import pytest

from book_library_mcp.config import ServerConfig, reset_config
from book_library_mcp.database.memory import InMemoryBookRepository, InMemoryUnitOfWork
from book_library_mcp.models.book import Book
from book_library_mcp.services.book_service import BookService
from book_library_mcp.wiring import reset_book_service, set_book_service

# === Storage Fixtures ===


@pytest.fixture
def repository() -> InMemoryBookRepository:
    """Provide an empty in-memory book repository."""
    return InMemoryBookRepository()


@pytest.fixture
def unit_of_work(repository: InMemoryBookRepository) -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork(repository)


@pytest.fixture
def book_service(unit_of_work: InMemoryUnitOfWork) -> Generator[BookService, None, None]:
    """Provide a service over an empty store, installed for the MCP handlers."""
    service = BookService(unit_of_work, logging.getLogger("tests.book_service"))
    set_book_service(service)
    yield service
    reset_book_service()


# === Configuration Fixtures ===


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide a clean environment without BOOK_LIBRARY_* variables."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("BOOK_LIBRARY_"):
            del os.environ[key]

    reset_config()
    yield

    os.environ.clear()
    os.environ.update(original_env)
    reset_config()


@pytest.fixture
def test_config(clean_env) -> ServerConfig:
    """Provide a test-specific server configuration."""
    return ServerConfig(
        server_name="test-book-library",
        server_version="0.0.1-test",
        debug=True,
        log_level="DEBUG",
        seed_sample_data=False,
    )


# === Sample Data Fixtures ===


@pytest.fixture
def sample_book_data() -> dict:
    """Provide valid arguments for creating a book."""
    return {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "978-0132350884",
        "published_date": datetime(2008, 8, 1),
        "page_count": 464,
    }


@pytest.fixture
def sample_book(sample_book_data: dict) -> Book:
    """Provide a new, unstored book."""
    return Book.create(**sample_book_data)


@pytest.fixture
def stored_book(book_service: BookService, sample_book_data: dict) -> Book:
    """Provide a book that already exists in the catalog."""
    return book_service.create_book(**sample_book_data)


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Drop process-wide singletons after each test."""
    yield
    reset_book_service()
    reset_config()
