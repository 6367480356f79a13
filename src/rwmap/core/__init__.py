"""
Core primitives: error hierarchy and settings.
"""

from rwmap.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    IndexLoadError,
    IndexParseError,
    InvariantViolationError,
    RwmapError,
    ShardWriteError,
)

__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RwmapError",
    "IndexLoadError",
    "IndexParseError",
    "ShardWriteError",
    "InvariantViolationError",
    "ConfigError",
]
