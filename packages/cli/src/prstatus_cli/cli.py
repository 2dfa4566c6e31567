"""CLI entry point for prstatus.

Commands:
  status   - classify your open pull requests by the action each one needs
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from prstatus_cli.commands.status import status_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("prstatus"),
    prog_name="prstatus",
)
@click.option(
    "--config",
    "config_path",
    default=".prstatus.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRSTATUS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log classification decisions and API calls.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Show which of your open pull requests need your attention."""
    from prstatus_core.config import load_config
    from prstatus_cli.auth import resolve_github_token

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve once so every subcommand sees the same token.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    ctx.obj["config"] = config


main.add_command(status_cmd)
