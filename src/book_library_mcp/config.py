"""Configuration management for Book Library MCP Server.

Settings come from BOOK_LIBRARY_* environment variables or a .env file and
are validated with Pydantic v2:
1. Server metadata sent during the MCP handshake
2. Transport selection and HTTP binding
3. Logging and observability switches
4. Startup behaviour (sample data)
"""

import logging
import threading

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseSettings):
    """MCP Server configuration."""

    model_config = SettingsConfigDict(
        # Use BOOK_LIBRARY_ prefix for all env vars
        env_prefix="BOOK_LIBRARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server Metadata (Required by MCP Protocol) ===

    server_name: str = Field(
        default="book-library",
        description="MCP server name used in protocol handshake",
        min_length=3,
        max_length=50,
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="0.1.0",
        description="Server version for capability negotiation",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    # === Transport Configuration ===

    transport: str = Field(
        default="stdio",
        description="Transport mechanism",
        pattern=r"^(stdio|streamable_http)$",
    )

    http_host: str = Field(
        default="127.0.0.1",
        description="HTTP server host for Streamable HTTP transport",
    )

    http_port: int = Field(
        default=8080,
        description="HTTP server port for Streamable HTTP transport",
        ge=1024,
        le=65535,
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    # === Startup Behaviour ===

    seed_sample_data: bool = Field(
        default=True,
        description="Create a few sample books when the catalog is first used",
    )

    enable_observability: bool = Field(
        default=False,
        description="Emit Logfire spans for tool and resource handlers",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        # Accept "debug" as well as "DEBUG" from the environment
        return v.strip().upper() if isinstance(v, str) else v

    # === Computed Properties ===

    @property
    def is_development(self) -> bool:
        return self.debug or self.log_level == "DEBUG"

    @property
    def effective_log_level(self) -> int:
        """Numeric logging level; the debug switch overrides log_level."""
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level)

    @property
    def server_info(self) -> dict[str, str]:
        """Get server information for the MCP handshake."""
        return {
            "name": self.server_name,
            "version": self.server_version,
            "transport": self.transport,
        }


# === Process-wide Configuration ===

_config: ServerConfig | None = None
_config_lock = threading.Lock()


def get_config() -> ServerConfig:
    """Load the configuration once per process and return it."""
    global _config

    if _config is None:
        with _config_lock:
            if _config is None:
                _config = ServerConfig()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration so the next call reads it again."""
    global _config

    with _config_lock:
        _config = None
