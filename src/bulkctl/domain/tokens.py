"""Input tokens and line classification.

Every input line maps to exactly one token.  Lines that equal a block
marker are structural; everything else is a plain command.  End of input
is a distinct token so it never collides with an empty command line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TokenKind(StrEnum):
    """The four events the classifier understands."""

    COMMAND = "command"
    OPEN_BLOCK = "open_block"
    CLOSE_BLOCK = "close_block"
    END_OF_INPUT = "end_of_input"


@dataclass(frozen=True, slots=True)
class Token:
    """One input event.  ``text`` is only meaningful for commands."""

    kind: TokenKind
    text: str = ""

    @classmethod
    def command(cls, text: str) -> Token:
        return cls(TokenKind.COMMAND, text)

    @property
    def is_command(self) -> bool:
        return self.kind is TokenKind.COMMAND


OPEN_BLOCK = Token(TokenKind.OPEN_BLOCK)
CLOSE_BLOCK = Token(TokenKind.CLOSE_BLOCK)
END_OF_INPUT = Token(TokenKind.END_OF_INPUT)


@dataclass(frozen=True, slots=True)
class BlockMarkers:
    """Literal lines that open and close an explicit block."""

    open: str = "{"
    close: str = "}"

    def __post_init__(self) -> None:
        if not self.open or not self.close:
            msg = "Block markers must be non-empty"
            raise ValueError(msg)
        if self.open == self.close:
            msg = f"Open and close markers must differ (both are {self.open!r})"
            raise ValueError(msg)


DEFAULT_MARKERS = BlockMarkers()


def classify_line(line: str, markers: BlockMarkers = DEFAULT_MARKERS) -> Token:
    """Map a raw input line (without its line terminator) to a token.

    Marker matching is exact: ``" {"`` is a command, not an open marker.
    """
    if line == markers.open:
        return OPEN_BLOCK
    if line == markers.close:
        return CLOSE_BLOCK
    return Token.command(line)
