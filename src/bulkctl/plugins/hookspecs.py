"""Pluggy hook specifications for bulkctl extensions.

Plugins contribute extra sinks at startup.  The caller owns the returned
sinks for the lifetime of the run; the dispatcher only references them
weakly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from bulkctl.config.settings import BulkSettings
    from bulkctl.sinks.base import BulkSink

hookspec = pluggy.HookspecMarker("bulkctl")
hookimpl = pluggy.HookimplMarker("bulkctl")


class BulkctlHookSpec:
    """Hook specifications for the bulkctl plugin system."""

    @hookspec
    def register_sinks(self, settings: BulkSettings) -> list[BulkSink] | None:
        """Return sinks that should receive every bulk of this run."""
