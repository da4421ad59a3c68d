"""Book Library MCP Resources Package

Resources are the read-only endpoints of the server, the "GET" side of the
catalog. Anything that changes state is a tool instead.
"""

from .books import book_resources

all_resources = book_resources

__all__ = [
    "all_resources",
    "book_resources",
]
