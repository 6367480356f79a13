"""
Structured error types for rwmap.

Every failure in a rewrite-map build is fatal: the output is a bulk artifact
handed to downstream infrastructure, so a partial map is worse than none.
The hierarchy below does not model retries. It classifies *why* a run
stopped and carries enough context (index path, shard, alias key) to act on
the report without re-running under a debugger.

Architecture:
    ::

        ┌────────────────────────────────────────────────────────────┐
        │                        RwmapError                           │
        │               (category, context, cause)                    │
        ├────────────────────────────────────────────────────────────┤
        │                                                             │
        │  IndexLoadError        ShardWriteError      ConfigError     │
        │  (SOURCE)              (STORAGE)            (CONFIG)        │
        │       │                                                     │
        │  IndexParseError       InvariantViolationError              │
        │  (PARSE)               (INTERNAL)                           │
        └────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Skip an alias whose narrowing came back empty
    ✅ DO: Raise InvariantViolationError with the key and template

    ❌ DON'T: Swallow the original OSError
    ✅ DO: Pass it as cause= for error chaining

Usage:
    from rwmap.core.errors import ShardWriteError

    try:
        fh.write(line)
    except OSError as e:
        raise ShardWriteError("write failed", cause=e).with_context(shard=3)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Error categories for classification in logs and CLI output.

    Attributes:
        SOURCE: Index artifact missing or unreadable
        PARSE: Index artifact not decodable
        STORAGE: Shard file creation, write or flush failures
        CONFIG: Invalid settings
        INTERNAL: Broken invariants, unexpected state
    """

    SOURCE = "SOURCE"
    PARSE = "PARSE"
    STORAGE = "STORAGE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only fields that are set end up in ``to_dict()``; anything without a
    dedicated field goes into ``metadata``.

    Examples:
        >>> ctx = ErrorContext(key="/ls.1", shard=2)
        >>> ctx.to_dict()
        {'shard': 2, 'key': '/ls.1'}
    """

    index_path: str | None = None
    shard: int | None = None
    name: str | None = None
    key: str | None = None
    template: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["index_path", "shard", "name", "key", "template"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RwmapError(Exception):
    """
    Base exception for all rwmap errors.

    Subclasses set ``default_category``; callers may override it per
    instance but rarely should.

    Examples:
        >>> error = RwmapError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(shard=1).context.shard
        1
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RwmapError:
        """
        Add context to this error (fluent API).

        Usage:
            raise IndexLoadError("Failed").with_context(index_path="/srv/man/idx.json")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# LOAD ERRORS
# =============================================================================


class IndexLoadError(RwmapError):
    """The index artifact cannot be read."""

    default_category = ErrorCategory.SOURCE


class IndexParseError(IndexLoadError):
    """The index artifact was read but is not a valid index document."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# RUN ERRORS
# =============================================================================


class ShardWriteError(RwmapError):
    """A shard file could not be created, written, flushed or closed."""

    default_category = ErrorCategory.STORAGE


class InvariantViolationError(RwmapError):
    """
    Narrowing returned no variant for an alias generated from a real variant.

    This is a mismatch between alias enumeration and index contents, never
    bad user input.
    """

    default_category = ErrorCategory.INTERNAL


class ConfigError(RwmapError):
    """Invalid configuration value."""

    default_category = ErrorCategory.CONFIG

