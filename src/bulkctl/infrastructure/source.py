"""Input collaborators producing lines for the dispatcher.

Line terminators are stripped; exhaustion of the iterator is the end
signal, so an empty string always means an empty line.

Command text is opaque.  Input is decoded as UTF-8 with
``surrogateescape`` so undecodable bytes survive as lone surrogates and
are written back out unchanged by the file sink.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import IO

STREAM_ENCODING = "utf-8"
STREAM_ERRORS = "surrogateescape"


def read_lines(stream: IO[str]) -> Iterator[str]:
    """Yield lines from an open text stream without their terminators.

    Single pass: the stream is consumed as it is iterated.
    """
    for raw in stream:
        yield raw.rstrip("\r\n")


class FileLineSource:
    """Restartable line source backed by a file.

    Each iteration reopens the file, so independent ``process_stream``
    calls each see the whole input.  Not safe to iterate concurrently.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __iter__(self) -> Iterator[str]:
        with self.path.open(encoding=STREAM_ENCODING, errors=STREAM_ERRORS) as f:
            yield from read_lines(f)
