"""Request-scoped logging for CLI commands."""

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from storefront_mcp.core.context import generate_correlation_id, sync_request_context

T = TypeVar("T")

logger = logging.getLogger("storefront_mcp.cli")


def cli_command(
    command_name: Optional[str] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator scoping a CLI command in a request context.

    Generates a ``cli_`` correlation id (surfaced as ``meta.request_id`` in
    emitted envelopes) and logs command start and completion.

    Example:
        >>> @cli_command("render-analyze")
        ... def analyze(template: str):
        ...     ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = command_name or func.__name__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            with sync_request_context(
                correlation_id=generate_correlation_id("cli"), client_id="cli"
            ):
                start = time.perf_counter()
                success = True
                logger.debug("CLI command started: %s", name)
                try:
                    return func(*args, **kwargs)
                except Exception:
                    success = False
                    raise
                finally:
                    logger.debug(
                        "CLI command completed: %s",
                        name,
                        extra={
                            "command": name,
                            "success": success,
                            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                        },
                    )

        return wrapper

    return decorator
