"""
Storage package for the Book Library MCP Server.

This package provides:
- Abstract storage capabilities (repository.py): BookRepository, UnitOfWork
- The process-local implementation (memory.py)

The store is deliberately in-memory. Everything the service needs goes
through the abstract classes, so a persistent store only has to implement
the same two interfaces.
"""

from .memory import InMemoryBookRepository, InMemoryUnitOfWork
from .repository import (
    BookRepository,
    CancellationSignal,
    UnitOfWork,
    raise_if_cancelled,
)

__all__ = [
    "BookRepository",
    "CancellationSignal",
    "InMemoryBookRepository",
    "InMemoryUnitOfWork",
    "UnitOfWork",
    "raise_if_cancelled",
]
