"""
Per-thread log context.

The context lives in a ``ContextVar``. ``threading.Thread`` does not inherit
context variables, so every shard worker starts empty and sets its own
``run_id``/``shard`` pair.
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, replace
from typing import Any

import structlog


def new_run_id() -> str:
    """Identifier for one rewrite-map build."""
    return uuid.uuid4().hex[:12]


def new_span_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass(frozen=True)
class LogContext:
    """Fields stamped onto every log entry of the current thread."""

    run_id: str | None = None
    shard: int | None = None
    step: str | None = None
    span_id: str | None = None
    parent_span_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


_EMPTY = LogContext()
_current: ContextVar[LogContext] = ContextVar("rwmap_log_context", default=_EMPTY)


def get_context() -> LogContext:
    return _current.get()


def set_context(**fields: Any) -> LogContext:
    """Replace the current context."""
    ctx = LogContext(**fields)
    _current.set(ctx)
    return ctx


def clear_context() -> None:
    _current.set(_EMPTY)


@contextmanager
def push_context(**fields: Any) -> Iterator[LogContext]:
    """
    Overlay ``fields`` on the current context for the duration of the block.

    ``None`` values leave the existing field untouched.
    """
    overlay = {k: v for k, v in fields.items() if v is not None}
    token = _current.set(replace(get_context(), **overlay))
    try:
        yield _current.get()
    finally:
        _current.reset(token)


def add_context_processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Structlog processor; explicit event keys win over context fields."""
    for key, value in get_context().to_dict().items():
        event_dict.setdefault(key, value)
    return event_dict


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)
