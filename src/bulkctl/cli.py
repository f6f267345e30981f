"""bulkctl command line: read commands from stdin, print and log bulks."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError

from bulkctl import __version__
from bulkctl.config.settings import BulkSettings
from bulkctl.context import AppContext
from bulkctl.infrastructure.source import STREAM_ENCODING, STREAM_ERRORS, read_lines


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="bulkctl")
@click.argument("size", type=click.IntRange(min=1))
@click.option(
    "-i",
    "--input",
    "input_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read commands from a file instead of stdin.",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for bulk<timestamp>.log files.",
)
@click.option("--no-console", is_flag=True, help="Do not print bulks to stdout.")
@click.option("--no-file", is_flag=True, help="Do not write bulk log files.")
@click.option("--stats", is_flag=True, help="Print a run summary to stderr.")
@click.option("--json", "json_output", is_flag=True, help="Render the summary as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
def cli(
    size: int,
    input_path: Path | None,
    log_dir: Path | None,
    no_console: bool,
    no_file: bool,
    stats: bool,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Group commands into bulks of SIZE and deliver each bulk to the sinks.

    A line holding only "{" opens a block and "}" closes it; a block's
    commands always form one bulk regardless of SIZE.
    """
    try:
        settings = BulkSettings.from_cli(
            config_path=config_path,
            verbose=verbose,
            log_json=log_json,
            stats=stats,
        ).with_sink_overrides(no_console=no_console, no_file=no_file, log_dir=log_dir)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc

    app = AppContext(settings, json_output=json_output)
    service = app.stream_service(size)
    if input_path is not None:
        result = service.run_file(input_path)
    else:
        stdin = click.open_file("-", encoding=STREAM_ENCODING, errors=STREAM_ERRORS)
        result = service.run(read_lines(stdin))
    app.emit(result)
