"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from ElasticQuery.cli.runner import CommandRunner
from ElasticQuery.config import DEFAULT_CONFIG_PATH, load_config_with_defaults


@click.group(help="ElasticQuery: build search documents from YAML and run them.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML file merged over the defaults.",
)
@click.option(
    "--defaults",
    "default_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to the default YAML config.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, default_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from a .env file (API keys) before the
    config is read.
    """
    load_dotenv()
    ctx.obj = load_config_with_defaults(config_path, default_path)


@cli.command("build")
@click.option("--compact", is_flag=True, help="Print the document on one line.")
@click.pass_context
def build_cmd(ctx: click.Context, compact: bool) -> None:
    """Print the configured search document as JSON."""
    runner = CommandRunner(ctx.obj)
    runner.run_build(action=ctx.command.name, indent=None if compact else 2)


@cli.command("search")
@click.pass_context
def search_cmd(ctx: click.Context) -> None:
    """Run the configured search document and print the hits."""
    runner = CommandRunner(ctx.obj)
    runner.run_search(action=ctx.command.name)
