"""
Tests for the catalog tools (create, update, delete, checkout, return).

These tests call the tool handlers directly, the way the MCP server does,
and check:
1. Input validation
2. Success responses and their status codes
3. The mapping of library errors onto response categories
"""

from uuid import uuid4

import pytest

from book_library_mcp.models.book import BookStatus
from book_library_mcp.tools import all_tools
from book_library_mcp.tools.books import (
    checkout_book_handler,
    create_book_handler,
    delete_book_handler,
    return_book_handler,
    update_book_handler,
)


@pytest.fixture
def create_arguments() -> dict:
    return {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "978-0132350884",
        "published_date": "2008-08-01",
        "page_count": 464,
    }


class TestCreateBookTool:
    """Test the create_book tool."""

    @pytest.mark.asyncio
    async def test_create_success(self, book_service, create_arguments):
        result = await create_book_handler(create_arguments)

        assert "isError" not in result
        assert result["status"] == 201
        book = result["data"]["book"]
        assert book["status"] == "available"
        assert book["page_count"] == 464
        assert result["location"] == f"library://books/{book['id']}"
        assert len(book_service.get_all_books()) == 1

    @pytest.mark.asyncio
    async def test_create_blank_title(self, book_service, create_arguments):
        create_arguments["title"] = "   "

        result = await create_book_handler(create_arguments)

        assert result["isError"] is True
        assert result["status"] == 400
        assert "Title cannot be empty" in result["content"][0]["text"]
        assert book_service.get_all_books() == []

    @pytest.mark.asyncio
    async def test_create_malformed_input(self, book_service, create_arguments):
        create_arguments["page_count"] = "many"

        result = await create_book_handler(create_arguments)

        assert result["status"] == 400
        assert "Invalid create_book parameters" in result["content"][0]["text"]

    @pytest.mark.asyncio
    async def test_create_missing_field(self, book_service, create_arguments):
        del create_arguments["isbn"]

        result = await create_book_handler(create_arguments)

        assert result["status"] == 400


class TestUpdateBookTool:
    """Test the update_book tool."""

    @pytest.mark.asyncio
    async def test_update_success(self, stored_book):
        result = await update_book_handler(
            {
                "book_id": str(stored_book.id),
                "title": "Clean Code (2nd)",
                "author": "Robert C. Martin",
                "page_count": 480,
            }
        )

        assert result["status"] == 200
        assert result["data"]["book"]["page_count"] == 480
        assert result["data"]["book"]["updated_at"] is not None

    @pytest.mark.asyncio
    async def test_update_missing_book(self, book_service):
        result = await update_book_handler(
            {"book_id": str(uuid4()), "title": "T", "author": "A", "page_count": 1}
        )

        assert result["isError"] is True
        assert result["status"] == 404

    @pytest.mark.asyncio
    async def test_update_invalid_details(self, stored_book):
        result = await update_book_handler(
            {"book_id": str(stored_book.id), "title": "T", "author": "A", "page_count": 0}
        )

        assert result["status"] == 400

    @pytest.mark.asyncio
    async def test_update_bad_id(self, book_service):
        result = await update_book_handler(
            {"book_id": "not-a-uuid", "title": "T", "author": "A", "page_count": 1}
        )

        assert result["status"] == 400


class TestDeleteBookTool:
    """Test the delete_book tool."""

    @pytest.mark.asyncio
    async def test_delete_success(self, book_service, stored_book):
        result = await delete_book_handler({"book_id": str(stored_book.id)})

        assert result["status"] == 204
        assert "data" not in result
        assert book_service.get_book_by_id(stored_book.id) is None

    @pytest.mark.asyncio
    async def test_delete_twice(self, stored_book):
        await delete_book_handler({"book_id": str(stored_book.id)})
        result = await delete_book_handler({"book_id": str(stored_book.id)})

        assert result["status"] == 404


class TestCirculationTools:
    """Test checkout_book and return_book."""

    @pytest.mark.asyncio
    async def test_checkout_then_return(self, book_service, stored_book):
        result = await checkout_book_handler({"book_id": str(stored_book.id)})
        assert result["status"] == 200
        assert result["data"]["book"]["status"] == "checked_out"

        result = await return_book_handler({"book_id": str(stored_book.id)})
        assert result["status"] == 200
        assert book_service.get_book_by_id(stored_book.id).status == BookStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_double_checkout_conflict(self, stored_book):
        await checkout_book_handler({"book_id": str(stored_book.id)})
        result = await checkout_book_handler({"book_id": str(stored_book.id)})

        assert result["isError"] is True
        assert result["status"] == 409

    @pytest.mark.asyncio
    async def test_return_missing_book(self, book_service):
        result = await return_book_handler({"book_id": str(uuid4())})

        assert result["status"] == 404


class TestToolDefinitions:
    """The tool registry exposes every catalog operation."""

    def test_tool_names(self):
        names = {tool["name"] for tool in all_tools}
        assert names == {
            "create_book",
            "update_book",
            "delete_book",
            "checkout_book",
            "return_book",
        }

    def test_tool_definitions_complete(self):
        for tool in all_tools:
            assert set(tool) == {"name", "description", "handler"}
            assert tool["description"]
            assert callable(tool["handler"])
