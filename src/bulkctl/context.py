"""AppContext - per-invocation state shared by the CLI.

Configures logging once from the resolved settings and centralizes result
emission (stderr routing + exit codes) so stdout carries bulks only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bulkctl.config.logging import configure_logging
from bulkctl.infrastructure.source import STREAM_ENCODING, STREAM_ERRORS
from bulkctl.output.console import create_console
from bulkctl.output.formatters import format_result
from bulkctl.services.stream import StreamService

if TYPE_CHECKING:
    from bulkctl.config.settings import BulkSettings
    from bulkctl.services.result import ServiceResult


class AppContext:
    """Holds settings and builds the stream service for one run."""

    def __init__(self, settings: BulkSettings, *, json_output: bool = False) -> None:
        self.settings = settings
        self.json_output = json_output
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def stream_service(self, threshold: int) -> StreamService:
        """Stream service whose console sink prints to the current stdout.

        stdout is opened with the same error handler as the input so
        undecodable bytes pass through to the terminal unchanged.
        """
        stdout = click.open_file("-", "w", encoding=STREAM_ENCODING, errors=STREAM_ERRORS)
        console = create_console(file=stdout)
        return StreamService(self.settings, threshold, console=console)

    def emit(self, result: ServiceResult) -> None:
        """Report a ServiceResult with correct exit semantics.

        * Success: warnings to stderr; the summary too when ``--stats``.
        * Failure: error to stderr, exits with code 1.
        """
        if not result.ok:
            click.echo(format_result(result, json_output=self.json_output), err=True)
            raise SystemExit(1)

        if self.settings.stats:
            click.echo(format_result(result, json_output=self.json_output), err=True)
        # In JSON mode, warnings are already in the serialized payload.
        if not (self.settings.stats and self.json_output):
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
