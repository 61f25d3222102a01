"""Storefront CLI - JSON-first command-line interface.

All commands emit response-v2 JSON envelopes to stdout (errors to stderr).
"""

from storefront_mcp.cli.logging import cli_command
from storefront_mcp.cli.main import cli
from storefront_mcp.cli.output import emit, emit_error, emit_success

__all__ = [
    "cli",
    "cli_command",
    "emit",
    "emit_error",
    "emit_success",
]
