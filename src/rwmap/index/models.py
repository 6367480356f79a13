"""
Index data model: manpage variants and constraint templates.

A *variant* is one concrete (name, section, language, package, suite)
combination of a manpage. A *constraint template* is a partial variant used
to narrow a variant list; unset fields are wildcards.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from pydantic import BaseModel, ConfigDict, Field

# Alias suite name -> canonical suite identifier (many-to-one).
SuiteAliasTable = dict[str, str]


class ManpageVariant(BaseModel):
    """
    One concrete manpage as published in the index.

    ``name`` keeps the canonical (case-preserving) spelling; alias keys are
    derived from its lowercased form.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    section: str = Field(min_length=1)
    language: str = Field(min_length=1)
    binarypkg: str = Field(min_length=1)
    suite: str = Field(min_length=1)

    @property
    def major_section(self) -> str:
        """First character of the section (``3`` for ``3p``)."""
        return self.section[:1]

    def serving_path(self, suffix: str) -> str:
        """Canonical file path serving this variant."""
        return f"/{self.suite}/{self.binarypkg}/{self.name}.{self.section}.{self.language}{suffix}"


@dataclass(frozen=True)
class ConstraintTemplate:
    """Partial variant; ``None`` fields match anything."""

    language: str | None = None
    section: str | None = None
    binarypkg: str | None = None
    suite: str | None = None

    def is_empty(self) -> bool:
        return not self.fields()

    def fields(self) -> dict[str, str]:
        """The fields this template fixes."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def matches(self, variant: ManpageVariant, *, section_prefix: bool = False) -> bool:
        """
        Check every set field against ``variant``.

        With ``section_prefix`` the section only has to be a prefix of the
        variant's section.
        """
        for key, value in self.fields().items():
            actual = getattr(variant, key)
            if key == "section" and section_prefix:
                if not actual.startswith(value):
                    return False
            elif actual != value:
                return False
        return True

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}={v}" for k, v in self.fields().items()) + "}"


class IndexDocument(BaseModel):
    """On-disk shape of an index artifact."""

    model_config = ConfigDict(extra="ignore")

    entries: list[ManpageVariant] = Field(default_factory=list)
    suites: dict[str, str] = Field(default_factory=dict)
