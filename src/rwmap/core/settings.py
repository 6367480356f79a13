"""Runtime settings for rwmap.

Configuration is explicit, validated, and environment-driven. Every field
can be set through an ``RWMAP_``-prefixed environment variable or a ``.env``
file; CLI options override individual fields on top of that.

Fields
──────
index_path      : Index artifact generated by the manpage indexer
concurrency     : Worker/shard count; ``<= 0`` means one per CPU
output_dir      : Directory receiving ``output.<n>`` shard files
queue_size      : Bound of the work queue (producer backpressure)
serving_suffix  : Extension appended to canonical serving paths
log_level       : Structlog log level
log_format      : ``console`` or ``json``

Examples:
    >>> from rwmap.core.settings import RwmapSettings
    >>> RwmapSettings(concurrency=4).resolve_workers()
    4
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INDEX_PATH = Path("/srv/man/auxserver.json")


class RwmapSettings(BaseSettings):
    """Settings shared by the CLI and programmatic callers."""

    model_config = SettingsConfigDict(
        env_prefix="RWMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Input / output ───────────────────────────────────────────
    index_path: Path = Field(
        default=DEFAULT_INDEX_PATH,
        description="Path to the manpage index artifact",
    )
    output_dir: Path = Field(
        default=Path("."),
        description="Directory in which output.<n> shard files are created",
    )
    serving_suffix: str = ".html"

    # ── Concurrency ──────────────────────────────────────────────
    concurrency: int = 0
    queue_size: int = Field(default=1024, ge=1)

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    def resolve_workers(self) -> int:
        """Return the effective worker count (CPU count when unset)."""
        return resolve_workers(self.concurrency)


def resolve_workers(requested: int | None) -> int:
    """Map a requested worker count to an effective one.

    ``None``, zero and negative values fall back to the number of logical
    CPUs (at least one).
    """
    if requested is not None and requested > 0:
        return requested
    return os.cpu_count() or 1


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, RwmapSettings] = {}


def get_settings(*, _force_reload: bool = False) -> RwmapSettings:
    """Load, validate, and cache a :class:`RwmapSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = RwmapSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
