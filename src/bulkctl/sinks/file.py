"""File sink: appends each bulk to ``bulk<started_at>.log``."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from bulkctl.infrastructure.filesystem import (
    BULK_FILE_PREFIX,
    BULK_FILE_SUFFIX,
    append_bulk,
    bulk_log_path,
)


class FileSink:
    """Writes bulks under *directory*, one file per start timestamp."""

    def __init__(
        self,
        directory: Path,
        *,
        prefix: str = BULK_FILE_PREFIX,
        suffix: str = BULK_FILE_SUFFIX,
    ) -> None:
        self.directory = Path(directory)
        self.prefix = prefix
        self.suffix = suffix

    def path_for(self, started_at: int) -> Path:
        return bulk_log_path(self.directory, started_at, prefix=self.prefix, suffix=self.suffix)

    def write(self, started_at: int, commands: Sequence[str]) -> None:
        append_bulk(self.path_for(started_at), commands)
