"""Command runner for coordinating CLI execution.

Configures logging, creates the search client, and turns failures into
``click.Abort`` at the CLI boundary.
"""

from __future__ import annotations

import click

from ElasticQuery.cli.commands import BuildCommand, SearchCommand
from ElasticQuery.client import create_search_client
from ElasticQuery.config import AppConfig
from ElasticQuery.utils.log import configure_logging, log


class CommandRunner:
    """Run CLI commands with logging and resource cleanup."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_build(self, action: str, *, indent: int | None = 2) -> None:
        """Print the configured document.

        Raises:
            click.Abort: When the document cannot be built.
        """
        self._configure_logging(action)
        try:
            BuildCommand(config=self.config, echo=click.echo, indent=indent).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Build failed: %s", e)
            raise click.Abort from e

    def run_search(self, action: str) -> None:
        """Execute the configured document against the search backend.

        Raises:
            click.Abort: When the search fails.
        """
        self._configure_logging(action)
        try:
            with create_search_client(self.config.client) as client:
                SearchCommand(config=self.config, client=client, echo=click.echo).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e
