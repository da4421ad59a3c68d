"""Logfire observability for Book Library MCP Server.

Tool and resource handlers are wrapped with trace_tool / trace_resource.
The wrappers open a Logfire span per call once initialize_observability()
has enabled tracing; until then they call straight through.
"""

import functools
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import logfire

from .config import ServerConfig

logger = logging.getLogger(__name__)


class _ObservabilityState:
    enabled: bool = False


def initialize_observability(config: ServerConfig) -> bool:
    """Configure Logfire if the server configuration enables it.

    Spans are only shipped when a LOGFIRE_TOKEN is present.
    """
    if not config.enable_observability:
        logger.debug("Observability disabled via configuration")
        _ObservabilityState.enabled = False
        return False

    logfire.configure(
        service_name=config.server_name,
        service_version=config.server_version,
        send_to_logfire="if-token-present",
        console=False,
    )
    _ObservabilityState.enabled = True
    logger.info("Logfire observability enabled")
    return True


def is_enabled() -> bool:
    return _ObservabilityState.enabled


def trace_tool(tool_name: str):
    """Decorator to trace MCP tool execution."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            if not _ObservabilityState.enabled:
                return await func(*args, **kwargs)

            with logfire.span(
                f"tool.execution.{tool_name}",
                tool_name=tool_name,
                tool_category=_categorize_tool(tool_name),
            ) as span:
                start_time = datetime.now()
                result = await func(*args, **kwargs)

                span.set_attribute(
                    "tool.duration_ms", (datetime.now() - start_time).total_seconds() * 1000
                )
                if isinstance(result, dict):
                    span.set_attribute("tool.success", not result.get("isError", False))
                    if "status" in result:
                        span.set_attribute("tool.status", result["status"])
                return result

        return wrapper

    return decorator


def trace_resource(resource_type: str):
    """Lightweight decorator for resource reads."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            if not _ObservabilityState.enabled:
                return await func(*args, **kwargs)

            with logfire.span(
                f"resource.read.{resource_type}",
                resource_type=resource_type,
            ) as span:
                _add_attributes(span, "input", kwargs)
                result = await func(*args, **kwargs)

                if isinstance(result, dict) and "books" in result:
                    span.set_attribute("result.item_count", len(result["books"]))
                return result

        return wrapper

    return decorator


def _categorize_tool(tool_name: str) -> str:
    if "checkout" in tool_name or "return" in tool_name:
        return "circulation"
    return "catalog"


def _add_attributes(span, prefix: str, data: dict[str, Any]):
    for key, value in data.items():
        if isinstance(value, str | int | float | bool):
            span.set_attribute(f"{prefix}.{key}", value)
