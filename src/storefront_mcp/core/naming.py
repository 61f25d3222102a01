"""Naming helpers for MCP tool registration."""

from __future__ import annotations

import asyncio
import functools
import json
import logging
import time
from typing import Any, Callable

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent

logger = logging.getLogger(__name__)


def _minify_response(result: dict[str, Any]) -> TextContent:
    """Convert dict to TextContent with minified JSON."""
    return TextContent(
        type="text",
        text=json.dumps(result, separators=(",", ":"), default=str),
    )


def canonical_tool(
    mcp: FastMCP,
    *,
    canonical_name: str,
    **tool_kwargs: Any,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that registers a tool under its canonical name.

    This decorator wraps the tool function to:
    1. Register it with FastMCP under the canonical name
    2. Minify dict responses into a single TextContent block
    3. Log the duration of calls that raise before re-raising

    Args:
        mcp: FastMCP instance
        canonical_name: The canonical name for the tool
        **tool_kwargs: Additional kwargs passed to mcp.tool()

    Returns:
        Decorated function registered as an MCP tool
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                start_time = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                    if isinstance(result, dict):
                        return _minify_response(result)
                    return result
                except Exception as e:
                    _log_tool_error(canonical_name, e, start_time)
                    raise

            wrapper = async_wrapper
        else:

            @functools.wraps(func)
            def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
                start_time = time.perf_counter()
                try:
                    result = func(*args, **kwargs)
                    if isinstance(result, dict):
                        return _minify_response(result)
                    return result
                except Exception as e:
                    _log_tool_error(canonical_name, e, start_time)
                    raise

            wrapper = sync_wrapper

        # Results are pre-serialized TextContent, not structured output
        tool_kwargs.setdefault("structured_output", False)
        return mcp.tool(name=canonical_name, **tool_kwargs)(wrapper)

    return decorator


def _log_tool_error(tool_name: str, error: Exception, start_time: float) -> None:
    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.error(
        f"Tool {tool_name} raised {type(error).__name__}",
        extra={
            "tool": tool_name,
            "error_type": type(error).__name__,
            "duration_ms": round(duration_ms, 2),
        },
    )
