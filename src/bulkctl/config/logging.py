"""structlog configuration for bulkctl.

stdout carries bulk lines and nothing else, so every log record goes to
stderr.  The records that matter at the default WARNING level are sink
failures (with their traceback), skipped plugin sinks and discarded
unterminated blocks; ``-v`` adds per-bulk flush and subscription detail.

With ``--log-json`` each record, traceback included, is one JSON line so
stderr can be piped into a log collector alongside the bulk output.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route stdlib and structlog records to stderr.

    Only the ``bulkctl`` logger is lowered to DEBUG by *verbose*; third-party
    loggers stay at WARNING either way.  Safe to call more than once: the
    root handler is replaced, not stacked.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if log_json:
        # Sink tracebacks must stay on one JSON line.
        processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stderr_handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("bulkctl").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
