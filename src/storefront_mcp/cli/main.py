"""Storefront CLI entry point.

JSON-only output for chat assistants and scripts.
"""

import click

from storefront_mcp.cli.commands import render_group
from storefront_mcp.config import ServerConfig


@click.group()
@click.option(
    "--config",
    "config_file",
    envvar="STOREFRONT_MCP_CONFIG_FILE",
    type=click.Path(exists=False),
    help="Path to a storefront-mcp TOML config file.",
)
@click.option(
    "--log-level",
    envvar="STOREFRONT_MCP_LOG_LEVEL",
    default=None,
    help="Override the configured log level.",
)
@click.pass_context
def cli(ctx: click.Context, config_file: str | None, log_level: str | None) -> None:
    """Storefront CLI - render storefront templates into chat artifacts.

    All commands output JSON for reliable parsing.
    """
    config = ServerConfig.from_env(config_file)
    if log_level:
        config.log_level = log_level.upper()
    config.setup_logging()

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


cli.add_command(render_group)


if __name__ == "__main__":
    cli()
