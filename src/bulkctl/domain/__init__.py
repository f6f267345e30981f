"""Domain layer - tokens, markers, and the bulk value type.

This layer depends only on stdlib.
It must never import from engine, sinks, services, config, or cli.
"""

from bulkctl.domain.bulk import Bulk
from bulkctl.domain.tokens import (
    END_OF_INPUT,
    BlockMarkers,
    Token,
    TokenKind,
    classify_line,
)

__all__ = [
    "END_OF_INPUT",
    "BlockMarkers",
    "Bulk",
    "Token",
    "TokenKind",
    "classify_line",
]
