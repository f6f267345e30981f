"""Filesystem operations for bulk log files.

One file per bulk start timestamp: ``{directory}/{prefix}{started_at}{suffix}``.
Bulks that start within the same clock tick share a file and are appended
in delivery order.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from bulkctl.infrastructure.source import STREAM_ENCODING, STREAM_ERRORS

BULK_FILE_PREFIX = "bulk"
BULK_FILE_SUFFIX = ".log"


def bulk_log_path(
    directory: Path,
    started_at: int,
    *,
    prefix: str = BULK_FILE_PREFIX,
    suffix: str = BULK_FILE_SUFFIX,
) -> Path:
    """Resolve the log file for a bulk that started at *started_at*."""
    return directory / f"{prefix}{started_at}{suffix}"


def render_bulk_line(commands: Sequence[str], separator: str = ", ") -> str:
    """Comma-separated commands with a trailing newline."""
    return separator.join(commands) + "\n"


def append_bulk(path: Path, commands: Sequence[str]) -> None:
    """Append one bulk line to *path*.

    Creates parent directories if they don't exist.  Undecodable input
    bytes carried as surrogates are written back as the original bytes.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding=STREAM_ENCODING, errors=STREAM_ERRORS) as f:
        f.write(render_bulk_line(commands))
