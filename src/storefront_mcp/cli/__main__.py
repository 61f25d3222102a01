"""Enables running the CLI via: python -m storefront_mcp.cli"""

from storefront_mcp.cli.main import cli

if __name__ == "__main__":
    cli()
