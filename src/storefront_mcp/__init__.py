"""Storefront MCP - MCP server for e-commerce and hosting management."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("storefront-mcp")
except PackageNotFoundError:
    # Package not installed (development mode without editable install)
    __version__ = "0.1.0"

from storefront_mcp.server import create_server, main

__all__ = ["__version__", "create_server", "main"]
