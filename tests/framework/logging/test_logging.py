"""Tests for rwmap.framework.logging — context, step timing, configuration."""

from __future__ import annotations

import logging
import threading

import pytest
from structlog.testing import capture_logs

from rwmap.framework.logging import (
    LogContext,
    clear_context,
    configure_logging,
    get_context,
    log_step,
    new_run_id,
    push_context,
    set_context,
)
from rwmap.framework.logging.context import add_context_processor


# ── Context ──────────────────────────────────────────────────


class TestContext:
    def test_to_dict_skips_none(self):
        assert LogContext(run_id="r1", shard=0).to_dict() == {"run_id": "r1", "shard": 0}

    def test_set_and_clear(self):
        set_context(run_id="r1")
        assert get_context().run_id == "r1"
        clear_context()
        assert get_context() == LogContext()

    def test_set_replaces(self):
        set_context(run_id="r1", shard=2)
        set_context(run_id="r2")
        assert get_context().shard is None

    def test_push_restores_on_exit(self):
        set_context(run_id="r1")
        with push_context(step="load", shard=None) as ctx:
            assert (ctx.run_id, ctx.step) == ("r1", "load")
        assert get_context() == LogContext(run_id="r1")

    def test_push_restores_on_error(self):
        set_context(run_id="r1")
        with pytest.raises(KeyError):
            with push_context(step="load"):
                raise KeyError("x")
        assert get_context().step is None

    def test_processor_does_not_override(self):
        set_context(run_id="r1", shard=1)
        event = add_context_processor(None, "info", {"event": "x", "shard": 9})
        assert event == {"event": "x", "shard": 9, "run_id": "r1"}

    def test_threads_start_empty(self):
        set_context(run_id="main")
        seen = []
        t = threading.Thread(target=lambda: seen.append(get_context().run_id))
        t.start()
        t.join()
        assert seen == [None]

    def test_run_id_unique(self):
        assert new_run_id() != new_run_id()
        assert len(new_run_id()) == 12


# ── Step timing ──────────────────────────────────────────────


class TestLogStep:
    def test_logs_end_with_metrics(self):
        with capture_logs() as logs:
            with log_step("rwmap.test", workers=2) as timer:
                timer.add_metric("lines", 10)
        start, end = logs
        assert start["event"] == "rwmap.test.start"
        assert start["log_level"] == "debug"
        assert end["event"] == "rwmap.test.end"
        assert end["lines"] == 10
        assert end["workers"] == 2
        assert end["duration_ms"] >= 0
        assert timer.ended_at is not None

    def test_context_scoped_to_block(self):
        set_context(run_id="r1")
        with log_step("rwmap.test") as timer:
            assert get_context().step == "rwmap.test"
            assert get_context().span_id == timer.span_id
        assert get_context() == LogContext(run_id="r1")

    def test_nested_steps_link_spans(self):
        with log_step("outer") as outer:
            with log_step("inner") as inner:
                pass
        assert inner.parent_span_id == outer.span_id

    def test_error_logged_and_reraised(self):
        with capture_logs() as logs:
            with pytest.raises(RuntimeError):
                with log_step("rwmap.fail") as timer:
                    raise RuntimeError("boom")
        assert timer.failed
        error = logs[-1]
        assert error["event"] == "rwmap.fail.error"
        assert error["error_type"] == "RuntimeError"
        assert error["error"] == "boom"
        assert not any(e["event"] == "rwmap.fail.end" for e in logs)


# ── Configuration ────────────────────────────────────────────


class TestConfigure:
    def test_configure_sets_level(self):
        configure_logging(level="WARNING", format="json", force=True)
        assert logging.getLogger("rwmap").level == logging.WARNING
        configure_logging(level="INFO", format="console", force=True)
        assert logging.getLogger("rwmap").level == logging.INFO

    def test_without_force_is_noop(self):
        configure_logging(level="INFO", force=True)
        configure_logging(level="ERROR")
        assert logging.getLogger("rwmap").level == logging.INFO

    def test_env_defaults(self, monkeypatch):
        monkeypatch.setenv("RWMAP_LOG_LEVEL", "debug")
        configure_logging(force=True)
        assert logging.getLogger("rwmap").level == logging.DEBUG
        configure_logging(level="INFO", force=True)
