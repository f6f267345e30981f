"""Subscriber registry holding non-owning references to sinks.

INVARIANT: The registry never keeps a sink alive.  A sink released by its
owner disappears from the registry and is skipped by any snapshot taken
after it was collected.

Entries are deduplicated by identity, not equality, and kept in
subscription order.
"""

from __future__ import annotations

import logging
import threading
import weakref

from bulkctl.sinks.base import BulkSink

logger = logging.getLogger(__name__)


class SubscriberRegistry:
    """Ordered, identity-deduplicated set of weakly referenced sinks."""

    def __init__(self) -> None:
        self._refs: list[weakref.ref[BulkSink]] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self.snapshot())

    def __contains__(self, sink: object) -> bool:
        return self._index(sink) is not None

    def add(self, sink: BulkSink) -> bool:
        """Register *sink*.  Returns False if it was already registered.

        Raises:
            TypeError: *sink* does not support weak references.
        """
        with self._lock:
            if self._index(sink) is not None:
                return False
            self._refs.append(weakref.ref(sink, self._on_collected))
            return True

    def remove(self, sink: BulkSink) -> bool:
        """Unregister *sink*.  Returns False if it was not registered."""
        with self._lock:
            idx = self._index(sink)
            if idx is None:
                return False
            del self._refs[idx]
            return True

    def clear(self) -> None:
        with self._lock:
            self._refs.clear()

    def snapshot(self) -> list[BulkSink]:
        """Strong references to every sink still alive, in subscription order.

        The returned list is private to the caller, so subscribing or
        unsubscribing while iterating it is safe.
        """
        with self._lock:
            live: list[BulkSink] = []
            for ref in self._refs:
                sink = ref()
                if sink is not None:
                    live.append(sink)
            return live

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _index(self, sink: object) -> int | None:
        with self._lock:
            for idx, ref in enumerate(self._refs):
                if ref() is sink:
                    return idx
            return None

    def _on_collected(self, ref: weakref.ref[BulkSink]) -> None:
        with self._lock:
            try:
                self._refs.remove(ref)
            except ValueError:
                return
        logger.debug("Dropped collected sink from registry")
