"""CLI package for ElasticQuery.

Click interface in ``ui``, lifecycle handling in ``runner`` and command
logic in ``commands``.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from ElasticQuery.cli.runner import CommandRunner
from ElasticQuery.cli.ui import cli


def main() -> None:
    """Run the ElasticQuery CLI (console script entry point)."""
    cli()
