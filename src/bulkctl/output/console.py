"""Rich Console factory and theme for bulkctl output.

Consoles render to stdout in the CLI and to a StringIO buffer in tests.
In non-TTY environments (tests, pipes) Rich automatically disables color
codes, so piped bulk output stays plain text.
"""

from __future__ import annotations

from io import StringIO
from typing import IO

from rich.console import Console
from rich.theme import Theme

BULK_THEME = Theme(
    {
        "bulk.label": "bold cyan",
        "bulk.ok": "bold green",
        "bulk.warning": "bold yellow",
        "bulk.error": "bold red",
        "bulk.key": "dim",
    }
)


def create_console(
    *,
    file: IO[str] | None = None,
    no_color: bool = False,
    width: int | None = None,
) -> Console:
    """Create a Console writing to *file*, or to a fresh StringIO buffer.

    Args:
        file: Target text stream.  Defaults to an in-memory buffer.
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=file if file is not None else StringIO(),
        theme=BULK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
