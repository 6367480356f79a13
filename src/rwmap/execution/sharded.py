"""Sharded concurrent writer — fans manpage names out to shard workers.

WHY
───
A full index expands to hundreds of millions of alias lines. Each worker
owns one output file for the whole run, so writes never need a lock; the
only shared mutable state is the work queue.

ARCHITECTURE
────────────
::

    ShardedWriter(index, output_dir, workers)
      └── .run(names)
            producer ──put──▶ Queue(maxsize) ──get──▶ worker 0 ─▶ output.0
                                                 ├──▶ worker 1 ─▶ output.1
                                                 └──▶ worker N ─▶ output.N

    - The producer blocks when the queue is full (backpressure).
    - One end-of-work sentinel per worker closes the queue.
    - The first worker error sets a shared failure event: the producer
      stops, the other workers stop at their next name and log
      ``shard.aborted``, every thread is joined, and ``run`` re-raises
      that error.
    - ``run`` returns only after every shard is flushed and closed.

Shard contents are not sorted and not deduplicated across shards. Merge with::

    LC_ALL=C sort output.* > /srv/man/rwmap.txt
    httxt2dbm -i /srv/man/rwmap.txt -o /srv/man/rwmap.dbm
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rwmap.core.errors import RwmapError, ShardWriteError
from rwmap.core.settings import resolve_workers
from rwmap.framework.logging import get_logger, log_step, new_run_id, set_context
from rwmap.index.service import IndexService
from rwmap.rewrite.disambiguator import DEFAULT_SUFFIX
from rwmap.rewrite.printer import print_all

log = get_logger(__name__)

_DONE = object()
_ABORTED = object()
_POLL_SECONDS = 0.1
_WRITE_BUFFER = 1 << 20


@dataclass
class ShardStats:
    """What one worker wrote."""

    shard: int
    path: Path
    names: int = 0
    lines: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "shard": self.shard,
            "path": str(self.path),
            "names": self.names,
            "lines": self.lines,
        }


@dataclass
class RunSummary:
    """Aggregate result of one :meth:`ShardedWriter.run`."""

    run_id: str
    shards: list[ShardStats] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def total_names(self) -> int:
        return sum(s.names for s in self.shards)

    @property
    def total_lines(self) -> int:
        return sum(s.lines for s in self.shards)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "shards": [s.to_dict() for s in self.shards],
            "total_names": self.total_names,
            "total_lines": self.total_lines,
            "duration_ms": round(self.duration_ms, 2),
        }


class ShardedWriter:
    """Writes the rewrite map for ``index`` into ``workers`` shard files."""

    def __init__(
        self,
        index: IndexService,
        output_dir: str | Path = ".",
        workers: int | None = 0,
        queue_size: int = 1024,
        suffix: str = DEFAULT_SUFFIX,
        shard_prefix: str = "output",
        run_id: str | None = None,
    ):
        """
        Args:
            index: Loaded index service.
            output_dir: Directory receiving the shard files. Must exist.
            workers: Shard/thread count. ``None`` or ``<= 0`` means one per CPU.
            queue_size: Bound of the work queue.
            suffix: Extension appended to serving paths.
            shard_prefix: Shard file name stem (``output.0``, ``output.1``, ...).
            run_id: Identifier attached to log entries. Generated if ``None``.
        """
        if queue_size < 1:
            raise ValueError("queue_size must be at least 1")
        self.index = index
        self.output_dir = Path(output_dir)
        self.workers = resolve_workers(workers)
        self.queue_size = queue_size
        self.suffix = suffix
        self.shard_prefix = shard_prefix
        self.run_id = run_id or new_run_id()

        self._failed = threading.Event()
        self._errors: list[Exception] = []
        self._errors_lock = threading.Lock()

    def shard_path(self, shard: int) -> Path:
        return self.output_dir / f"{self.shard_prefix}.{shard}"

    # ------------------------------------------------------------------ #
    # Producer
    # ------------------------------------------------------------------ #

    def run(self, names: Iterable[str] | None = None) -> RunSummary:
        """
        Process ``names`` (default: every name in the index) and block until
        all shards are closed.

        Raises:
            ShardWriteError: a shard could not be created, written or flushed
            InvariantViolationError: an alias could not be resolved
        """
        if names is None:
            names = list(self.index.entries)

        self._failed.clear()
        self._errors.clear()
        work: queue.Queue = queue.Queue(maxsize=self.queue_size)
        summary = RunSummary(
            run_id=self.run_id,
            shards=[ShardStats(shard=i, path=self.shard_path(i)) for i in range(self.workers)],
        )
        threads = [
            threading.Thread(
                target=self._work,
                args=(stats, work),
                name=f"rwmap-shard-{stats.shard}",
                daemon=True,
            )
            for stats in summary.shards
        ]

        with log_step("rwmap.shards", workers=self.workers, output_dir=str(self.output_dir)) as timer:
            for t in threads:
                t.start()

            delivered = False
            try:
                delivered = all(self._put(work, name) for name in names) and all(
                    self._put(work, _DONE) for _ in threads
                )
            finally:
                if not delivered:
                    # Producer stopped early: release workers still polling.
                    self._failed.set()
                for t in threads:
                    t.join()

            if self._errors:
                raise self._errors[0]

            timer.add_metric("names", summary.total_names)
            timer.add_metric("lines", summary.total_lines)

        summary.duration_ms = timer.duration_ms
        return summary

    def _put(self, work: queue.Queue, item: object) -> bool:
        while not self._failed.is_set():
            try:
                work.put(item, timeout=_POLL_SECONDS)
                return True
            except queue.Full:
                continue
        return False

    # ------------------------------------------------------------------ #
    # Workers
    # ------------------------------------------------------------------ #

    def _next(self, work: queue.Queue) -> object:
        while not self._failed.is_set():
            try:
                return work.get(timeout=_POLL_SECONDS)
            except queue.Empty:
                continue
        return _ABORTED

    def _work(self, stats: ShardStats, work: queue.Queue) -> None:
        set_context(run_id=self.run_id, shard=stats.shard)
        try:
            with open(stats.path, "w", encoding="utf-8", newline="\n", buffering=_WRITE_BUFFER) as out:
                while isinstance(name := self._next(work), str):
                    stats.lines += print_all(out, self.index, name, self.suffix)
                    stats.names += 1
        except Exception as e:
            error = self._as_error(e, stats)
            with self._errors_lock:
                self._errors.append(error)
            self._failed.set()
            log.error("shard.failed", path=str(stats.path), **error.to_dict())
            return

        if name is _ABORTED:
            log.warning("shard.aborted", path=str(stats.path), names=stats.names, lines=stats.lines)
            return
        log.info("shard.done", path=str(stats.path), names=stats.names, lines=stats.lines)

    @staticmethod
    def _as_error(e: Exception, stats: ShardStats) -> RwmapError:
        if isinstance(e, RwmapError):
            return e.with_context(shard=stats.shard)
        if isinstance(e, OSError):
            return ShardWriteError(f"Shard {stats.path}: {e}", cause=e).with_context(shard=stats.shard)
        return RwmapError(f"Unexpected error in shard {stats.shard}: {e!r}", cause=e).with_context(
            shard=stats.shard
        )
