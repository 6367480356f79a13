"""
Alias pattern table.

Every URL under which a manpage can be requested is produced by one row of
the tables below. A row pairs a path template with the variant fields the
alias pins down; the disambiguator turns those fields into a
:class:`ConstraintTemplate` and asks the index which variant serves it.

Order matters. For each variant, ``VARIANT_PATTERNS`` runs top to bottom,
then ``SUITE_PATTERNS`` runs once per spelling of the variant's suite
(canonical name first, then each alias). The first row to produce a key
wins; later duplicates are dropped by the printer.

Path placeholders: ``{name}`` (lowercased), ``{language}``, ``{section}``,
``{binarypkg}``, ``{suite}`` (the suite spelling being expanded).

Every key starts with the lowercased name, optionally behind suite and/or
package segments, so two different names never produce the same key.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from rwmap.index.models import ConstraintTemplate, ManpageVariant


class SectionForm(str, Enum):
    """Which spelling of the section a row uses."""

    FULL = "full"  # "3pm"
    MAJOR = "major"  # "3"


@dataclass(frozen=True)
class AliasPattern:
    """One row of the alias table."""

    case: str
    path: str
    constrain: tuple[str, ...] = ()
    section: SectionForm = SectionForm.FULL
    # Section spelling used in the constraint when it differs from the path.
    constraint_section: SectionForm | None = None

    def key(self, variant: ManpageVariant, suite: str) -> str:
        return self.path.format(
            name=variant.name.lower(),
            language=variant.language,
            section=_section(variant, self.section),
            binarypkg=variant.binarypkg,
            suite=suite,
        )

    def template(self, variant: ManpageVariant) -> ConstraintTemplate:
        values = {}
        for field_name in self.constrain:
            if field_name == "section":
                values["section"] = _section(variant, self.constraint_section or self.section)
            else:
                values[field_name] = getattr(variant, field_name)
        return ConstraintTemplate(**values)


def _section(variant: ManpageVariant, form: SectionForm) -> str:
    return variant.major_section if form is SectionForm.MAJOR else variant.section


_FULL, _MAJOR = SectionForm.FULL, SectionForm.MAJOR

VARIANT_PATTERNS: tuple[AliasPattern, ...] = (
    AliasPattern("01", "/{name}"),
    AliasPattern("02", "/{name}.{language}", ("language",)),
    AliasPattern("03", "/{name}.{section}", ("section",)),
    AliasPattern("03", "/{name}.{section}", ("section",), _MAJOR),
    # FreeBSD-style
    AliasPattern("03", "/{name}/{section}", ("section",)),
    AliasPattern("03", "/{name}/{section}", ("section",), _MAJOR),
    AliasPattern("04", "/{name}.{section}.{language}", ("language", "section")),
    AliasPattern("04", "/{name}.{section}.{language}", ("language", "section"), _MAJOR),
    AliasPattern("05", "/{binarypkg}/{name}", ("binarypkg",)),
    AliasPattern("06", "/{binarypkg}/{name}.{language}", ("language", "binarypkg")),
    AliasPattern("07", "/{binarypkg}/{name}.{section}", ("binarypkg", "section")),
    AliasPattern("07", "/{binarypkg}/{name}.{section}", ("binarypkg", "section"), _MAJOR),
    AliasPattern("08", "/{binarypkg}/{name}.{section}.{language}", ("language", "section", "binarypkg")),
    AliasPattern("08", "/{binarypkg}/{name}.{section}.{language}", ("language", "section", "binarypkg"), _MAJOR),
)

SUITE_PATTERNS: tuple[AliasPattern, ...] = (
    AliasPattern("09", "/{suite}/{name}", ("suite",)),
    AliasPattern("10", "/{suite}/{name}.{language}", ("language", "suite")),
    AliasPattern("11", "/{suite}/{name}.{section}", ("section", "suite")),
    AliasPattern("11", "/{suite}/{name}.{section}", ("section", "suite"), _MAJOR, constraint_section=_FULL),
    AliasPattern("12", "/{suite}/{name}.{section}.{language}", ("language", "section", "suite")),
    AliasPattern("12", "/{suite}/{name}.{section}.{language}", ("language", "section", "suite"), _MAJOR),
    AliasPattern("13", "/{suite}/{binarypkg}/{name}", ("binarypkg", "suite")),
    AliasPattern("14", "/{suite}/{binarypkg}/{name}.{language}", ("language", "binarypkg", "suite")),
    AliasPattern("15", "/{suite}/{binarypkg}/{name}.{section}", ("section", "binarypkg", "suite")),
    AliasPattern("15", "/{suite}/{binarypkg}/{name}.{section}", ("section", "binarypkg", "suite"), _MAJOR),
    AliasPattern("16", "/{suite}/{binarypkg}/{name}.{section}.{language}",
                 ("language", "binarypkg", "section", "suite")),
    AliasPattern("16", "/{suite}/{binarypkg}/{name}.{section}.{language}",
                 ("language", "binarypkg", "section", "suite"), _MAJOR),
)


class Alias(NamedTuple):
    """A generated alias key with the constraints it implies."""

    key: str
    template: ConstraintTemplate
    case: str


def enumerate_aliases(
    variants: Iterable[ManpageVariant],
    suites_for: Callable[[str], list[str]],
) -> Iterator[Alias]:
    """
    Yield every alias of a manpage name, in priority order.

    ``suites_for`` maps a canonical suite to all of its spellings, canonical
    first (``Index.suites_for``). Keys may repeat; callers deduplicate.
    """
    for variant in variants:
        for pattern in VARIANT_PATTERNS:
            yield Alias(pattern.key(variant, variant.suite), pattern.template(variant), pattern.case)
        for suite in suites_for(variant.suite):
            for pattern in SUITE_PATTERNS:
                yield Alias(pattern.key(variant, suite), pattern.template(variant), pattern.case)
