"""
Index service: variant lookup and narrowing.

The rewrite-map pipeline treats the index as a black box with this contract:

- ``entries`` maps a lowercased manpage name to its variants, in the index's
  priority order.
- ``narrow`` returns the variants matching a constraint template, best
  first, and never returns an empty list for a template derived from one
  of the variants it is given.
- ``serving_path`` turns a variant into the path that serves it.

:class:`IndexService` states that contract as a protocol; :class:`Index` is
the implementation backed by a loaded index artifact. Ranking in
:class:`Index` is the artifact order: whoever builds the artifact decides
which language or suite wins an unqualified request.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from rwmap.index.models import ConstraintTemplate, ManpageVariant


@runtime_checkable
class IndexService(Protocol):
    """What the rewrite-map pipeline needs from an index."""

    @property
    def entries(self) -> Mapping[str, list[ManpageVariant]]: ...

    @property
    def suites(self) -> Mapping[str, str]: ...

    def narrow(
        self,
        accept_language: str,
        template: ConstraintTemplate,
        hint: ConstraintTemplate,
        variants: Sequence[ManpageVariant],
    ) -> list[ManpageVariant]: ...

    def serving_path(self, variant: ManpageVariant, suffix: str) -> str: ...


def suite_spellings(suites: Mapping[str, str], suite: str) -> list[str]:
    """The canonical suite followed by every alias that maps to it, in table order."""
    return [suite] + [alias for alias, canonical in suites.items() if canonical == suite]


def _prefer(variants: list[ManpageVariant], predicate) -> list[ManpageVariant]:
    """Stable partition: matching variants first, relative order kept."""
    return [v for v in variants if predicate(v)] + [v for v in variants if not predicate(v)]


@dataclass
class Index:
    """In-memory index loaded from an artifact."""

    entries: dict[str, list[ManpageVariant]] = field(default_factory=dict)
    suites: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_variants(
        cls,
        variants: Iterable[ManpageVariant],
        suites: Mapping[str, str] | None = None,
    ) -> Index:
        """Group variants by lowercased name, keeping their order."""
        entries: dict[str, list[ManpageVariant]] = {}
        for variant in variants:
            entries.setdefault(variant.name.lower(), []).append(variant)
        return cls(entries=entries, suites=dict(suites or {}))

    @property
    def variant_count(self) -> int:
        return sum(len(v) for v in self.entries.values())

    def suites_for(self, suite: str) -> list[str]:
        """The canonical suite followed by every alias that maps to it."""
        return suite_spellings(self.suites, suite)

    def narrow(
        self,
        accept_language: str,
        template: ConstraintTemplate,
        hint: ConstraintTemplate,
        variants: Sequence[ManpageVariant],
    ) -> list[ManpageVariant]:
        """
        Return the variants matching ``template``, best first.

        A section constraint prefers exact matches and falls back to prefix
        matches, so ``/ls.3`` reaches a page filed under ``3p``. ``hint``
        fields and ``accept_language`` reorder the result without removing
        anything; both are no-ops when empty.
        """
        filtered = [v for v in variants if template.matches(v)]
        if not filtered and template.section is not None:
            filtered = [v for v in variants if template.matches(v, section_prefix=True)]

        if accept_language and template.language is None:
            filtered = _prefer(filtered, lambda v: v.language == accept_language)
        if not hint.is_empty():
            filtered = _prefer(filtered, hint.matches)
        return filtered

    def serving_path(self, variant: ManpageVariant, suffix: str) -> str:
        return variant.serving_path(suffix)
