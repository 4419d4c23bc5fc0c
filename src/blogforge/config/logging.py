"""structlog configuration for blogforge.

Stdlib ``logging.getLogger(__name__)`` records from every module are routed
through structlog's ``ProcessorFormatter`` so they share one renderer:

- Human (default): short-timestamp console lines on stderr
- JSON (``--log-json``): one JSON object per line on stderr

Levels for the ``blogforge`` logger follow the CLI flags: ``--verbose``
shows DEBUG, ``--quiet`` only ERROR, otherwise WARNING (config fallbacks
and extractor failures). Third-party loggers stay at WARNING.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from blogforge.config.settings import BlogForgeSettings

LOGGER_NAME = "blogforge"

# rich pulls in markdown-it-py, which logs parser steps at DEBUG.
_NOISY_LOGGERS = ("markdown_it",)


def level_for(settings: BlogForgeSettings) -> int:
    """Return the ``blogforge`` logger level implied by *settings*."""
    if settings.verbose:
        return logging.DEBUG
    if settings.quiet:
        return logging.ERROR
    return logging.WARNING


def bind_command(command_path: str) -> None:
    """Tag every following log record with the running command."""
    structlog.contextvars.bind_contextvars(command=command_path)


def configure_logging(settings: BlogForgeSettings) -> None:
    """Install the stderr handler and levels for one CLI invocation.

    Safe to call repeatedly: the root handler is replaced, not stacked, and
    context bound by a previous invocation is cleared.
    """
    structlog.contextvars.clear_contextvars()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_json:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        shared_processors.append(structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False))
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
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
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(level_for(settings))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
