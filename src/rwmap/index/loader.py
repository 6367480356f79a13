"""
Index artifact loader.

The artifact is a JSON document, optionally gzip-compressed::

    {
      "entries": [
        {"name": "Ls", "section": "1", "language": "en",
         "binarypkg": "coreutils", "suite": "bookworm"},
        ...
      ],
      "suites": {"stable": "bookworm", "testing": "trixie"}
    }

Entry order is significant: it is the priority order the index uses when
narrowing (see :mod:`rwmap.index.service`).
"""

from __future__ import annotations

import gzip
from pathlib import Path

from pydantic import ValidationError

from rwmap.core.errors import IndexLoadError, IndexParseError
from rwmap.framework.logging import get_logger
from rwmap.index.models import IndexDocument
from rwmap.index.service import Index

log = get_logger(__name__)

_GZIP_MAGIC = b"\x1f\x8b"


def _read_bytes(path: Path) -> bytes:
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise IndexLoadError(f"Index not found: {path}", cause=e).with_context(index_path=str(path))
    except OSError as e:
        raise IndexLoadError(f"Cannot read index: {e}", cause=e).with_context(index_path=str(path))

    if raw[:2] == _GZIP_MAGIC:
        try:
            return gzip.decompress(raw)
        except (OSError, EOFError) as e:
            raise IndexParseError(f"Corrupt gzip stream: {e}", cause=e).with_context(
                index_path=str(path)
            )
    return raw


def parse_index(data: bytes | str) -> Index:
    """Decode and validate an index document."""
    try:
        document = IndexDocument.model_validate_json(data)
    except ValidationError as e:
        raise IndexParseError(
            f"Invalid index document ({e.error_count()} errors)", cause=e
        )
    return Index.from_variants(document.entries, document.suites)


def load_index(path: str | Path) -> Index:
    """
    Load the index artifact at ``path``.

    Raises:
        IndexLoadError: the file is missing or unreadable
        IndexParseError: the file is not a valid index document
    """
    path = Path(path)
    raw = _read_bytes(path)
    try:
        index = parse_index(raw)
    except IndexParseError as e:
        e.with_context(index_path=str(path))
        raise

    log.info(
        "index.loaded",
        index_path=str(path),
        entries=len(index.entries),
        variants=index.variant_count,
        suite_aliases=len(index.suites),
    )
    return index
