"""
Book model for the Book Library MCP Server.

This model is the domain core of the library. It owns its invariants and its
circulation state machine; nothing outside the model assigns fields that an
invariant depends on. Books are exposed through MCP resources such as:
- library://books/list
- library://books/{book_id}

The model follows the same rules as the rest of the server:
1. Pydantic v2 for automatic JSON serialization
2. Field constraints that mirror the domain invariants
3. Behaviour methods (update_details, mark_as_checked_out, mark_as_returned)
   as the only mutation path
"""

import enum
from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import InvalidArgumentError, InvalidStateError


class BookStatus(str, enum.Enum):
    """Circulation status of a book."""

    AVAILABLE = "available"
    CHECKED_OUT = "checked_out"
    RESERVED = "reserved"
    OUT_OF_SERVICE = "out_of_service"


def _require_text(value: str, field: str, label: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{label} cannot be empty", field=field)


def _require_positive_pages(page_count: int) -> None:
    if not isinstance(page_count, int) or isinstance(page_count, bool) or page_count <= 0:
        raise InvalidArgumentError("Page count must be positive", field="page_count")


class Book(BaseModel):
    """
    Represents one book record in the library catalog.

    Use Book.create() to build a new record: it validates the input, assigns
    a fresh identifier and starts the book in the AVAILABLE state. Direct
    construction is reserved for rehydrating existing records.
    """

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique identifier assigned when the book is created",
        frozen=True,
    )

    title: str = Field(
        ...,
        description="The title of the book",
        min_length=1,
        examples=["Clean Code", "Design Patterns"],
    )

    author: str = Field(
        ...,
        description="The author or authors of the book",
        min_length=1,
        examples=["Robert C. Martin", "Gang of Four"],
    )

    isbn: str = Field(
        ...,
        description="International Standard Book Number, fixed at creation",
        min_length=1,
        frozen=True,
        examples=["978-0132350884", "9780201633610"],
    )

    published_date: datetime = Field(
        ...,
        description="Publication date of the book",
        frozen=True,
    )

    page_count: int = Field(
        ...,
        description="Number of pages",
        gt=0,
        examples=[464, 395],
    )

    status: BookStatus = Field(
        default=BookStatus.AVAILABLE,
        description="Current circulation status",
    )

    # Timestamps for tracking
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp when the book was added to the catalog",
        frozen=True,
    )

    updated_at: datetime | None = Field(
        default=None,
        description="Timestamp of the last change, unset until the first mutation",
    )

    @field_validator("title", "author", "isbn")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Reject whitespace-only strings, which min_length lets through."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @classmethod
    def create(
        cls,
        title: str,
        author: str,
        isbn: str,
        published_date: datetime,
        page_count: int,
    ) -> "Book":
        """
        Create a new book.

        Raises:
            InvalidArgumentError: If title, author or isbn is empty or
                whitespace, or page_count is not positive
        """
        _require_text(title, "title", "Title")
        _require_text(author, "author", "Author")
        _require_text(isbn, "isbn", "ISBN")
        _require_positive_pages(page_count)

        try:
            return cls(
                title=title,
                author=author,
                isbn=isbn,
                published_date=published_date,
                page_count=page_count,
            )
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid book data: {e}") from e

    @property
    def is_available(self) -> bool:
        """Check if the book can be checked out."""
        return self.status == BookStatus.AVAILABLE

    def update_details(self, title: str, author: str, page_count: int) -> None:
        """
        Replace the editable details of the book.

        Nothing changes if any value is rejected.

        Raises:
            InvalidArgumentError: If title or author is empty or whitespace,
                or page_count is not positive
        """
        _require_text(title, "title", "Title")
        _require_text(author, "author", "Author")
        _require_positive_pages(page_count)

        self.title = title
        self.author = author
        self.page_count = page_count
        self.updated_at = datetime.now()

    def mark_as_checked_out(self) -> None:
        """
        Move the book from AVAILABLE to CHECKED_OUT.

        Raises:
            InvalidStateError: If the book is not available
        """
        if self.status != BookStatus.AVAILABLE:
            raise InvalidStateError(f"Book '{self.title}' is not available for checkout")
        self.status = BookStatus.CHECKED_OUT
        self.updated_at = datetime.now()

    def mark_as_returned(self) -> None:
        """
        Move the book from CHECKED_OUT back to AVAILABLE.

        Raises:
            InvalidStateError: If the book is not checked out
        """
        if self.status != BookStatus.CHECKED_OUT:
            raise InvalidStateError(f"Book '{self.title}' is not checked out")
        self.status = BookStatus.AVAILABLE
        self.updated_at = datetime.now()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3f2b8c1e-6f6a-4b43-9a8e-0d8f6c3b2a71",
                "title": "Clean Code",
                "author": "Robert C. Martin",
                "isbn": "978-0132350884",
                "published_date": "2008-08-01T00:00:00",
                "page_count": 464,
                "status": "available",
            }
        }
    )
