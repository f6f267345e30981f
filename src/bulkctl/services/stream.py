"""StreamService - one bulkctl run from settings to delivered bulks.

The service owns every sink it builds.  The dispatcher only holds weak
references, so the sinks live exactly as long as the service does.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from rich.console import Console

from bulkctl.config.settings import BulkSettings
from bulkctl.engine.buffer import Clock, wall_clock
from bulkctl.engine.dispatcher import Dispatcher
from bulkctl.infrastructure.source import FileLineSource
from bulkctl.plugins.manager import PluginManager
from bulkctl.services.result import ServiceError, ServiceResult
from bulkctl.sinks.base import BulkSink
from bulkctl.sinks.console import ConsoleSink
from bulkctl.sinks.file import FileSink

logger = logging.getLogger(__name__)


class StreamService:
    """Builds the sink set for *settings* and drives a dispatcher over input.

    Parameters:
        settings: Resolved settings for this invocation.
        threshold: Bulk size N, already validated as positive.
        console: Console for the console sink (defaults to a StringIO-backed one).
        clock: Time source for bulk timestamps.
        plugin_manager: Pre-built manager; discovered lazily when omitted.
    """

    def __init__(
        self,
        settings: BulkSettings,
        threshold: int,
        *,
        console: Console | None = None,
        clock: Clock = wall_clock,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self._settings = settings
        self._console = console
        self._plugin_manager = plugin_manager
        self._sinks: list[BulkSink] = []
        self._built = False
        self.dispatcher = Dispatcher(
            threshold,
            clock=clock,
            markers=settings.markers.to_markers(),
        )

    @property
    def sinks(self) -> list[BulkSink]:
        return list(self._sinks)

    def build_sinks(self) -> list[BulkSink]:
        """Create the configured sinks and subscribe them.  Idempotent."""
        if self._built:
            return self.sinks
        self._built = True

        if self._settings.console.enabled:
            self._sinks.append(ConsoleSink(self._console))
        if self._settings.file.enabled:
            cfg = self._settings.file
            self._sinks.append(FileSink(cfg.directory, prefix=cfg.prefix, suffix=cfg.suffix))
        if self._settings.plugins.enabled:
            self._sinks.extend(self._load_plugin_sinks())

        subscribed: list[BulkSink] = []
        for sink in self._sinks:
            try:
                self.dispatcher.subscribe(sink)
            except TypeError:
                logger.warning(
                    "Skipping sink %s: it cannot be weakly referenced",
                    type(sink).__name__,
                )
                continue
            subscribed.append(sink)
        self._sinks = subscribed
        if not self._sinks:
            logger.warning("No sinks enabled; bulks will be discarded")
        return self.sinks

    def run(self, source: Iterable[str]) -> ServiceResult:
        """Process every line of *source* and report what happened."""
        self.build_sinks()
        stats = self.dispatcher.process_stream(source)

        warnings: list[str] = []
        if stats.sink_failures:
            warnings.append(f"{stats.sink_failures} sink write(s) failed; see log for details")
        if stats.discarded:
            warnings.append(
                f"Input ended inside an open block; {stats.discarded} command(s) were not delivered"
            )
        return ServiceResult(
            ok=True,
            op="run",
            data={**stats.to_dict(), "threshold": self.dispatcher.threshold},
            warnings=warnings,
        )

    def run_file(self, path: Path) -> ServiceResult:
        """Process the lines of the file at *path*."""
        try:
            return self.run(FileLineSource(path))
        except OSError as exc:
            return ServiceResult(
                ok=False,
                op="run",
                error=ServiceError(
                    code="INPUT_ERROR",
                    message=f"Cannot read input {path}: {exc.strerror or exc}",
                    detail={"path": str(path)},
                ),
            )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load_plugin_sinks(self) -> list[BulkSink]:
        if self._plugin_manager is None:
            self._plugin_manager = PluginManager()
            self._plugin_manager.discover_and_load(local_dir=self._local_plugin_dir())
        return self._plugin_manager.collect_sinks(self._settings)

    def _local_plugin_dir(self) -> Path:
        local_dir = self._settings.plugins.local_dir
        if local_dir.is_absolute():
            return local_dir
        base = self._settings.config_path.parent if self._settings.config_path else Path.cwd()
        return base / local_dir
