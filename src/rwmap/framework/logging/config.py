"""
structlog setup for rwmap.

Logs always go to stderr: ``rwmap aliases`` prints map lines on stdout and
must stay pipeable. ``RWMAP_LOG_LEVEL`` and ``RWMAP_LOG_FORMAT`` are read
when no explicit value is passed.
"""

import logging
import os
import sys
from typing import Literal

import structlog
from structlog.types import Processor

from rwmap.framework.logging.context import add_context_processor

_configured = False


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Install the processor chain and route stdlib logging to stderr.

    Only the first call takes effect unless ``force`` is set; CLI commands
    pass ``force=True`` so their options always apply.
    """
    global _configured
    if _configured and not force:
        return

    log_level = getattr(logging, (level or os.environ.get("RWMAP_LOG_LEVEL", "INFO")).upper())
    log_format = (format or os.environ.get("RWMAP_LOG_FORMAT", "console")).lower()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_context_processor,
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level, force=True)
    logging.getLogger("rwmap").setLevel(log_level)
    _configured = True
