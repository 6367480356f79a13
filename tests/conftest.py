"""
Shared pytest fixtures for rwmap tests.

This module provides:
- In-memory indexes for the documented scenarios
- Index artifacts written to tmp_path
- Settings cache / logging context cleanup for test isolation
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Ensure rwmap package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from rwmap.core.settings import clear_settings_cache
from rwmap.framework.logging import clear_context
from rwmap.index import Index, ManpageVariant
from tests._support.builders import variant


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests that write shard files or drive the CLI as integration tests."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if test_path.parts[0] in {"execution", "cli"}:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    """Fresh settings cache and logging context; no stray RWMAP_ env vars."""
    import os

    for key in list(os.environ):
        if key.startswith("RWMAP_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    clear_context()
    yield
    clear_settings_cache()
    clear_context()


# =============================================================================
# Indexes
# =============================================================================


@pytest.fixture
def ls_index() -> Index:
    """One variant of Ls, with ``stable`` aliasing ``bullseye``."""
    return Index.from_variants(
        [variant("Ls", "1", "en", "coreutils", "bullseye")],
        {"stable": "bullseye"},
    )


@pytest.fixture
def bilingual_index() -> Index:
    """cp in English and German, English listed first."""
    return Index.from_variants(
        [
            variant("cp", language="en"),
            variant("cp", language="de"),
        ]
    )


@pytest.fixture
def sample_variants() -> list[ManpageVariant]:
    return [
        variant("ls", "1", "en", "coreutils", "bookworm"),
        variant("ls", "1", "fr", "manpages-fr", "bookworm"),
        variant("ls", "1", "en", "coreutils", "trixie"),
        variant("printf", "1", "en", "coreutils", "bookworm"),
        variant("printf", "3", "en", "manpages-dev", "bookworm"),
        variant("printf", "3p", "en", "manpages-posix-dev", "bookworm"),
        variant("Xterm", "1", "en", "xterm", "bookworm"),
        variant("crontab", "5", "de", "manpages-de", "trixie"),
        variant("crontab", "1", "en", "cron", "trixie"),
        variant("systemd.unit", "5", "en", "systemd", "bookworm"),
    ]


@pytest.fixture
def sample_suites() -> dict[str, str]:
    return {"stable": "bookworm", "testing": "trixie", "bookworm-backports": "bookworm"}


@pytest.fixture
def sample_index(sample_variants, sample_suites) -> Index:
    return Index.from_variants(sample_variants, sample_suites)


@pytest.fixture
def write_index(tmp_path) -> Callable[..., Path]:
    """Write an index artifact and return its path."""

    def _write(
        variants: list[ManpageVariant],
        suites: dict[str, str] | None = None,
        name: str = "auxserver.json",
    ) -> Path:
        doc: dict[str, Any] = {
            "entries": [v.model_dump() for v in variants],
            "suites": suites or {},
        }
        path = tmp_path / name
        path.write_text(json.dumps(doc), encoding="utf-8")
        return path

    return _write

