"""Book Library MCP Server - FastMCP Implementation

Exposes the book catalog over the Model Context Protocol.

Features exposed:
- Resources: book catalog listing, book details, health check
- Tools: create, update, delete, checkout and return

Logs go to stderr so stdout stays free for the stdio transport.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from .config import ServerConfig, get_config
from .observability import initialize_observability
from .resources import all_resources
from .tools import all_tools
from .wiring import get_book_service

logger = logging.getLogger(__name__)


def configure_logging(config: ServerConfig) -> None:
    """Initialize logging - stderr for logs, stdout for MCP protocol."""
    logging.basicConfig(
        level=config.effective_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if not config.is_development:
        # Reduce noise but keep important messages
        logging.getLogger("fastmcp").setLevel(logging.WARNING)


def create_server(config: ServerConfig | None = None) -> FastMCP:
    """Create the FastMCP server and register every resource and tool."""
    config = config or get_config()

    mcp = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=(
            "Book Library MCP Server - manages the book records of a library. "
            "Use resources to browse the catalog and tools to add, edit, remove, "
            "check out and return books."
        ),
    )

    for resource in all_resources:
        uri = resource.get("uri_template", resource.get("uri"))
        logger.debug("Registering resource: %s with URI: %s", resource["name"], uri)
        mcp.resource(
            uri=uri,
            name=resource["name"],
            description=resource["description"],
            mime_type=resource["mime_type"],
        )(resource["handler"])

    logger.info("Registered %d resources", len(all_resources))

    for tool in all_tools:
        logger.debug("Registering tool: %s", tool["name"])
        mcp.tool(
            name=tool["name"],
            description=tool["description"],
        )(tool["handler"])

    logger.info("Registered %d tools", len(all_tools))
    return mcp


def run_server(mcp: FastMCP, config: ServerConfig) -> None:
    """Run the server on the configured transport."""

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    if config.transport == "stdio":
        logger.info("Starting %s v%s on stdio transport", config.server_name, config.server_version)
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting %s v%s on http://%s:%d",
            config.server_name,
            config.server_version,
            config.http_host,
            config.http_port,
        )
        mcp.run(transport="streamable-http", host=config.http_host, port=config.http_port)


def main() -> None:
    """Main entry point for the MCP server.

    Started via:
    - Command line: `python -m book_library_mcp.server`
    - Entry point: `book-library-mcp` (defined in pyproject.toml)
    """
    config = get_config()
    configure_logging(config)

    try:
        logger.info("=" * 60)
        logger.info("Book Library MCP Server")
        logger.info("Version: %s", config.server_version)
        logger.info("Transport: %s", config.transport)
        logger.info("Debug Mode: %s", config.debug)
        logger.info("=" * 60)

        initialize_observability(config)
        # Build the catalog up front so seeding happens before the first request
        get_book_service(config)

        run_server(create_server(config), config)

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Failed to start MCP server")
        sys.exit(1)


if __name__ == "__main__":
    main()
