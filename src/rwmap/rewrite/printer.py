"""
Per-name alias emission with deduplication.

One :class:`OncePrinter` exists per manpage name and is discarded when that
name is done. Two alias rows can spell the same key (a one-character section
collides with its own first character, a language code can equal a section
code); only the first is written.

Keys are *not* deduplicated across names or shards. Different names cannot
collide by construction, and the downstream ``sort`` merges shards.
"""

from __future__ import annotations

import functools
from typing import TextIO

from rwmap.core.errors import ShardWriteError
from rwmap.index.models import ConstraintTemplate
from rwmap.index.service import IndexService, suite_spellings
from rwmap.rewrite.disambiguator import DEFAULT_SUFFIX, Disambiguator
from rwmap.rewrite.patterns import enumerate_aliases


def format_line(key: str, target: str) -> str:
    """One rewrite-map line: ``<key> <target>\\n``."""
    return f"{key} {target}\n"


class OncePrinter:
    """Writes each alias key of one manpage name at most once."""

    def __init__(self, out: TextIO, disambiguator: Disambiguator):
        self.out = out
        self.disambiguator = disambiguator
        self.printed: set[str] = set()

    def must_print(self, key: str, template: ConstraintTemplate) -> bool:
        """Resolve and write ``key`` unless already written. Returns True if written."""
        if key in self.printed:
            return False
        target = self.disambiguator.resolve(key, template)
        try:
            self.out.write(format_line(key, target))
        except OSError as e:
            raise ShardWriteError(f"Write failed: {e}", cause=e).with_context(key=key)
        self.printed.add(key)
        return True


def print_all(
    out: TextIO,
    index: IndexService,
    name: str,
    suffix: str = DEFAULT_SUFFIX,
) -> int:
    """Write every alias of ``name`` to ``out``; return the number of lines."""
    variants = index.entries[name]
    printer = OncePrinter(out, Disambiguator(index, variants, suffix))
    written = 0
    for alias in enumerate_aliases(variants, _suites_for(index)):
        if printer.must_print(alias.key, alias.template):
            written += 1
    return written


def resolve_name(
    index: IndexService,
    name: str,
    suffix: str = DEFAULT_SUFFIX,
) -> list[tuple[str, str]]:
    """Same pipeline as :func:`print_all`, returning ``(key, target)`` pairs."""
    variants = index.entries[name]
    disambiguator = Disambiguator(index, variants, suffix)
    seen: dict[str, str] = {}
    for alias in enumerate_aliases(variants, _suites_for(index)):
        if alias.key not in seen:
            seen[alias.key] = disambiguator.resolve(alias.key, alias.template)
    return list(seen.items())


def _suites_for(index: IndexService):
    return functools.partial(suite_spellings, index.suites)
