"""The sink capability consumed by the dispatcher."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class BulkSink(Protocol):
    """Receives each completed bulk.

    ``write`` is called synchronously, once per bulk, with the bulk's
    start timestamp and its commands in arrival order.  Sinks may raise;
    the dispatcher logs the failure and carries on with the next sink.
    """

    def write(self, started_at: int, commands: Sequence[str]) -> None: ...
