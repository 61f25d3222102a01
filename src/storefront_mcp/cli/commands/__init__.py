"""CLI command groups."""

from storefront_mcp.cli.commands.render import render_group

__all__ = ["render_group"]
