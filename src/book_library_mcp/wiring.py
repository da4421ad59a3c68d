"""Component wiring for the Book Library MCP Server.

The object graph is built explicitly: repository -> unit of work -> service.
MCP handlers reach the shared service through get_book_service(), which
creates and seeds it once on first use, even when the first calls race.
"""

import logging
import threading

from .config import ServerConfig, get_config
from .database.memory import InMemoryBookRepository, InMemoryUnitOfWork
from .services.book_service import BookService
from .services.seed import seed_sample_data

logger = logging.getLogger(__name__)


def build_book_service(service_logger: logging.Logger | None = None) -> BookService:
    """Build an empty catalog service backed by a fresh in-memory store."""
    repository = InMemoryBookRepository()
    unit_of_work = InMemoryUnitOfWork(repository)
    return BookService(
        unit_of_work, service_logger or logging.getLogger("book_library_mcp.services")
    )


_book_service: BookService | None = None
_service_lock = threading.Lock()


def get_book_service(config: ServerConfig | None = None) -> BookService:
    """Get or create the process-wide book service.

    The first call seeds sample data when the configuration asks for it.
    """
    global _book_service

    if _book_service is None:
        with _service_lock:
            if _book_service is None:
                config = config or get_config()
                service = build_book_service()
                if config.seed_sample_data:
                    seed_sample_data(service)
                logger.debug("Book service created")
                _book_service = service
    return _book_service


def set_book_service(service: BookService | None) -> None:
    """Replace the process-wide service (useful for testing)."""
    global _book_service

    with _service_lock:
        _book_service = service


def reset_book_service() -> None:
    """Drop the process-wide service so the next call builds a new one."""
    set_book_service(None)
