"""
Step timing.

``log_step`` wraps a coarse phase of a run (loading the index, writing all
shards) and logs ``<event>.start`` at DEBUG, then either ``<event>.end`` with
``duration_ms`` or ``<event>.error``. Keep it out of per-name and per-alias
loops.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from rwmap.framework.logging.context import get_context, get_logger, new_span_id, push_context


@dataclass
class StepTimer:
    """Timing and metrics collected for one ``log_step`` block."""

    event: str
    span_id: str = field(default_factory=new_span_id)
    parent_span_id: str | None = None
    metrics: dict[str, Any] = field(default_factory=dict)
    started_at: float = field(default_factory=time.perf_counter)
    ended_at: float | None = None
    failed: bool = False

    def add_metric(self, key: str, value: Any) -> "StepTimer":
        self.metrics[key] = value
        return self

    def stop(self) -> None:
        if self.ended_at is None:
            self.ended_at = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        end = self.ended_at if self.ended_at is not None else time.perf_counter()
        return (end - self.started_at) * 1000

    def fields(self) -> dict[str, Any]:
        return {"duration_ms": round(self.duration_ms, 2), **self.metrics}


@contextmanager
def log_step(event: str, level: str = "info", **metrics: Any) -> Iterator[StepTimer]:
    """
    Time and log a block.

    Usage::

        with log_step("rwmap.shards", workers=8) as timer:
            summary = writer.run()
            timer.add_metric("lines", summary.total_lines)

    Exceptions are logged as ``<event>.error`` and re-raised.
    """
    log = get_logger("rwmap.timing")
    timer = StepTimer(event=event, parent_span_id=get_context().span_id, metrics=dict(metrics))

    with push_context(step=event, span_id=timer.span_id, parent_span_id=timer.parent_span_id):
        log.debug(f"{event}.start", **metrics)
        try:
            yield timer
        except Exception as e:
            timer.stop()
            timer.failed = True
            log.error(f"{event}.error", error_type=type(e).__name__, error=str(e), **timer.fields())
            raise
        timer.stop()
        getattr(log, level)(f"{event}.end", **timer.fields())
