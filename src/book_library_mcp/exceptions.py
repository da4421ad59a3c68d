"""
Error taxonomy for the Book Library MCP Server.

Every layer raises these exceptions and lets them propagate to its caller.
Only the MCP tool and resource handlers translate them into protocol
responses, which keeps the domain and storage layers free of transport
concerns:

- InvalidArgumentError -> 400 (malformed input data)
- InvalidStateError -> 409 (illegal status transition)
- NotFoundError -> 404 (target does not exist)
- DuplicateError -> 409 (duplicate key on insert)
- OperationCancelledError -> aborted before any mutation
"""


class LibraryError(Exception):
    """Base exception for library operations."""


class InvalidArgumentError(LibraryError, ValueError):
    """Raised when input data violates a book invariant."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class InvalidStateError(LibraryError):
    """Raised when a status transition is not allowed from the current state."""


class NotFoundError(LibraryError):
    """Raised when an entity is not found."""


class DuplicateError(LibraryError):
    """Raised when attempting to create a duplicate entity."""


class OperationCancelledError(LibraryError):
    """Raised when an operation is cancelled before it changed any state."""
