"""Sinks - consumers of completed bulks.

Each sink is an independent implementation of :class:`BulkSink`; they
share no base-class state.
"""

from bulkctl.sinks.base import BulkSink
from bulkctl.sinks.console import ConsoleSink
from bulkctl.sinks.file import FileSink

__all__ = ["BulkSink", "ConsoleSink", "FileSink"]
