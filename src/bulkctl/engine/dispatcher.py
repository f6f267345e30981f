"""Dispatcher - drives classifier and buffer, fans bulks out to sinks.

INVARIANT: Sink failures are warnings, never errors.  One failing sink
neither blocks delivery to the others nor corrupts engine state.

Processing is synchronous: ``process`` returns only after every live sink
has seen any bulk the token closed, so sinks observe bulks in the exact
order their boundaries occurred in the input.  A sink that blocks stalls
the whole pipeline; there is no timeout.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from bulkctl.domain.bulk import Bulk
from bulkctl.domain.tokens import (
    DEFAULT_MARKERS,
    END_OF_INPUT,
    BlockMarkers,
    Token,
    TokenKind,
    classify_line,
)
from bulkctl.engine.buffer import BulkBuffer, Clock, wall_clock
from bulkctl.engine.classifier import Classifier
from bulkctl.engine.registry import SubscriberRegistry
from bulkctl.sinks.base import BulkSink

logger = logging.getLogger(__name__)


@dataclass
class DispatchStats:
    """Counters for the current stream."""

    bulks: int = 0
    commands: int = 0
    sink_failures: int = 0
    discarded: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "bulks": self.bulks,
            "commands": self.commands,
            "sink_failures": self.sink_failures,
            "discarded": self.discarded,
        }


class Dispatcher:
    """Turns a token stream into bulks delivered to subscribed sinks.

    Parameters:
        threshold: Loose commands per bulk outside any block (N >= 1).
        clock: Time source for bulk start timestamps.
        markers: Lines recognised as block open/close by ``process_line``.
    """

    def __init__(
        self,
        threshold: int,
        *,
        clock: Clock = wall_clock,
        markers: BlockMarkers = DEFAULT_MARKERS,
    ) -> None:
        self._classifier = Classifier(threshold)
        self._buffer = BulkBuffer(clock)
        self._subscribers = SubscriberRegistry()
        self._markers = markers
        self._stats = DispatchStats()

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, sink: BulkSink) -> None:
        """Register *sink* for future bulks.  Re-subscribing is a no-op.

        The dispatcher holds only a weak reference; the caller must keep
        the sink alive for as long as it should receive bulks.  Sinks
        without ``__weakref__`` support raise ``TypeError``.
        """
        if self._subscribers.add(sink):
            logger.debug("Subscribed sink %s", type(sink).__name__)

    def unsubscribe(self, sink: BulkSink) -> None:
        """Remove *sink* if registered.  Unknown sinks are ignored."""
        if self._subscribers.remove(sink):
            logger.debug("Unsubscribed sink %s", type(sink).__name__)

    @property
    def subscribers(self) -> list[BulkSink]:
        """Live subscribed sinks, in subscription order."""
        return self._subscribers.snapshot()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def threshold(self) -> int:
        return self._classifier.threshold

    @property
    def depth(self) -> int:
        return self._classifier.depth

    @property
    def pending(self) -> tuple[str, ...]:
        """Commands buffered for the bulk not yet closed."""
        return self._buffer.commands

    @property
    def stats(self) -> DispatchStats:
        return self._stats

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def process(self, token: Token) -> Bulk | None:
        """Feed one token.  Returns the bulk it closed, if any."""
        step = self._classifier.feed(token)
        if step.command is not None:
            self._buffer.push(step.command)
            self._stats.commands += 1

        if step.boundary:
            bulk = self._buffer.flush(self._fan_out)
            if bulk is not None:
                self._stats.bulks += 1
            return bulk

        if token.kind is TokenKind.END_OF_INPUT and self._classifier.in_block:
            self._discard_unterminated()
        return None

    def process_line(self, line: str) -> Bulk | None:
        """Classify a raw input line against the configured markers and feed it."""
        return self.process(classify_line(line, self._markers))

    def process_stream(self, source: Iterable[str]) -> DispatchStats:
        """Feed every line of *source*, then end-of-input.

        Counters are reset at the start of each stream and the returned
        stats describe this stream only.
        """
        self._stats = DispatchStats()
        for line in source:
            self.process_line(line)
        self.process(END_OF_INPUT)
        return self._stats

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _fan_out(self, started_at: int, commands: Sequence[str]) -> None:
        logger.debug("Flushing bulk started_at=%d size=%d", started_at, len(commands))
        for sink in self._subscribers.snapshot():
            try:
                sink.write(started_at, commands)
            except Exception:
                self._stats.sink_failures += 1
                logger.warning(
                    "Sink %s failed to write bulk started_at=%d",
                    type(sink).__name__,
                    started_at,
                    exc_info=True,
                )

    def _discard_unterminated(self) -> None:
        """Drop a bulk left inside an unclosed block at end of input."""
        depth = self._classifier.depth
        dropped = self._buffer.clear()
        self._classifier.reset()
        self._stats.discarded += dropped
        logger.warning(
            "Input ended inside an open block (depth=%d); discarded %d command(s)",
            depth,
            dropped,
        )
