"""Console sink: one ``bulk: a, b, c`` line per bulk."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.text import Text

from bulkctl.output.console import create_console

LABEL = "bulk: "
SEPARATOR = ", "


class ConsoleSink:
    """Prints each bulk on its own line.

    Command text goes to the console's file untouched: no markup, no
    wrapping, no tab expansion or control-character stripping.  Only the
    label is styled, and only when the console is a terminal.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or create_console()

    def write(self, started_at: int, commands: Sequence[str]) -> None:
        body = SEPARATOR.join(commands) + "\n"
        if self.console.is_terminal:
            self.console.print(Text(LABEL, style="bulk.label"), end="")
            self.console.file.write(body)
        else:
            self.console.file.write(LABEL + body)
        self.console.file.flush()
