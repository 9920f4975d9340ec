"""structlog configuration for jsonrules.

Everything in the package logs through ``logging.getLogger(__name__)``.
One stderr handler with a structlog ``ProcessorFormatter`` renders those
records, either as console lines or as JSON lines (``--log-json``).

Levels for the ``jsonrules`` logger:
- ``--verbose``: DEBUG (registry building, plugin loading, rule counts)
- default: WARNING (rules disabled by unusable parameters, unknown formats)
- ``--quiet``: ERROR
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def _level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _shared_processors(log_json: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_json:
        # exc_info from a rejected pattern becomes a structured "exception" list.
        processors.append(structlog.processors.dict_tracebacks)
    processors.append(structlog.processors.UnicodeDecoder())
    return processors


def _remove_installed_handlers(root: logging.Logger) -> None:
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route all logging through a single structlog-formatted handler.

    Safe to call repeatedly: a handler installed by an earlier call is
    replaced, and handlers owned by anything else are left alone.

    Args:
        verbose: DEBUG output for the ``jsonrules`` logger; wins over *quiet*.
        quiet: Only errors from the ``jsonrules`` logger.
        log_json: JSON lines instead of console lines.
        stream: Destination; defaults to the current ``sys.stderr``.

    Returns:
        The installed handler.
    """
    stream = stream if stream is not None else sys.stderr
    shared_processors = _shared_processors(log_json)

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    _remove_installed_handlers(root_logger)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("jsonrules").setLevel(_level(verbose=verbose, quiet=quiet))
    # Hook-call tracing is DEBUG noise even under --verbose.
    logging.getLogger("pluggy").setLevel(logging.WARNING)
    return handler
