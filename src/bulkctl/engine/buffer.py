"""Accumulation buffer for the bulk currently being built.

INVARIANT: The buffer is empty after every ``flush``, whether or not the
delivery callback raised.  Empty buffers never deliver.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence

from bulkctl.domain.bulk import Bulk

Clock = Callable[[], int]
Deliver = Callable[[int, Sequence[str]], None]


def wall_clock() -> int:
    """Seconds since the epoch, truncated to an integer."""
    return int(time.time())


class BulkBuffer:
    """Ordered commands plus the clock reading of the first one.

    Parameters:
        clock: Time source sampled when the first command of a bulk arrives.
            Inject a fake in tests to make timestamps deterministic.
    """

    def __init__(self, clock: Clock = wall_clock) -> None:
        self._clock = clock
        self._commands: list[str] = []
        self._started_at: int | None = None

    def __len__(self) -> int:
        return len(self._commands)

    def __bool__(self) -> bool:
        return bool(self._commands)

    @property
    def started_at(self) -> int | None:
        """Timestamp of the pending bulk, or None when empty."""
        return self._started_at

    @property
    def commands(self) -> tuple[str, ...]:
        return tuple(self._commands)

    def push(self, command: str | None) -> None:
        """Append *command*.  None and ``""`` are ignored."""
        if not command:
            return
        if not self._commands:
            self._started_at = self._clock()
        self._commands.append(command)

    def flush(self, deliver: Deliver) -> Bulk | None:
        """Hand the pending bulk to *deliver* and clear the buffer.

        Returns the delivered bulk, or None if the buffer was empty.
        Exceptions from *deliver* propagate after the buffer is cleared.
        """
        if not self._commands:
            return None

        assert self._started_at is not None
        bulk = Bulk(started_at=self._started_at, commands=tuple(self._commands))
        self.clear()
        deliver(bulk.started_at, bulk.commands)
        return bulk

    def clear(self) -> int:
        """Drop the pending bulk without delivering it.  Returns how many commands were dropped."""
        dropped = len(self._commands)
        self._commands = []
        self._started_at = None
        return dropped
