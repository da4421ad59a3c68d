"""Book Library MCP Tools Package

Tools are the operations with side effects (create, update, delete,
checkout, return). Read-only access lives in the resources package.
"""

from .books import book_tools

all_tools = book_tools

__all__ = [
    "all_tools",
    "book_tools",
]
