"""
Structured, context-aware logging for rwmap.

Usage:
    from rwmap.framework.logging import configure_logging, get_logger, log_step

    configure_logging()
    log = get_logger(__name__)

    with log_step("rwmap.generate"):
        run()
"""

from rwmap.framework.logging.config import configure_logging
from rwmap.framework.logging.context import (
    LogContext,
    clear_context,
    get_context,
    get_logger,
    new_run_id,
    push_context,
    set_context,
)
from rwmap.framework.logging.timing import StepTimer, log_step

__all__ = [
    "configure_logging",
    "get_logger",
    "set_context",
    "clear_context",
    "get_context",
    "push_context",
    "new_run_id",
    "LogContext",
    "StepTimer",
    "log_step",
]
