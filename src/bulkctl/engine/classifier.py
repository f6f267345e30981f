"""Command-classifying state machine: block nesting plus the size threshold.

The classifier never touches commands beyond deciding whether they are
buffered and whether a boundary follows.  Every transition is total;
there is no error path.

===========  =================================  ==========================
Event        depth == 0                         depth > 0
===========  =================================  ==========================
open         boundary, depth = 1, size = 0      depth += 1
close        ignored                            depth -= 1, boundary at 0
command      buffer, size += 1, boundary at N   buffer
end          boundary                           nothing (bulk is dropped)
===========  =================================  ==========================
"""

from __future__ import annotations

from dataclasses import dataclass

from bulkctl.domain.tokens import Token, TokenKind


@dataclass(frozen=True, slots=True)
class Step:
    """Outcome of feeding one token.

    Attributes:
        command: Text to append to the buffer, or None.
        boundary: Whether the buffer must be flushed after the append.
    """

    command: str | None = None
    boundary: bool = False


_NOTHING = Step()
_BOUNDARY = Step(boundary=True)


class Classifier:
    """Tracks block depth and the loose-command counter for one stream."""

    def __init__(self, threshold: int) -> None:
        if threshold < 1:
            msg = f"Bulk size must be a positive integer, got {threshold}"
            raise ValueError(msg)
        self._threshold = threshold
        self._depth = 0
        self._size = 0

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def depth(self) -> int:
        """Number of unmatched open markers."""
        return self._depth

    @property
    def size(self) -> int:
        """Loose commands counted toward the threshold.  Zero inside a block."""
        return self._size

    @property
    def in_block(self) -> bool:
        return self._depth > 0

    def feed(self, token: Token) -> Step:
        """Advance the state machine by one token."""
        if token.kind is TokenKind.OPEN_BLOCK:
            return self._open()
        if token.kind is TokenKind.CLOSE_BLOCK:
            return self._close()
        if token.kind is TokenKind.END_OF_INPUT:
            return _NOTHING if self.in_block else _BOUNDARY
        return self._command(token.text)

    def reset(self) -> None:
        """Forget any open blocks and the loose-command count."""
        self._depth = 0
        self._size = 0

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _open(self) -> Step:
        self._depth += 1
        if self._depth == 1:
            # Loose commands gathered so far close before the block starts.
            self._size = 0
            return _BOUNDARY
        return _NOTHING

    def _close(self) -> Step:
        if self._depth == 0:
            return _NOTHING
        self._depth -= 1
        return _BOUNDARY if self._depth == 0 else _NOTHING

    def _command(self, text: str) -> Step:
        if not text:
            return _NOTHING
        if self.in_block:
            return Step(command=text)
        self._size += 1
        if self._size == self._threshold:
            self._size = 0
            return Step(command=text, boundary=True)
        return Step(command=text)
