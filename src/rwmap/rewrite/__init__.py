"""
Alias generation, disambiguation and per-name emission.
"""

from rwmap.rewrite.disambiguator import DEFAULT_SUFFIX, Disambiguator
from rwmap.rewrite.patterns import (
    SUITE_PATTERNS,
    VARIANT_PATTERNS,
    Alias,
    AliasPattern,
    SectionForm,
    enumerate_aliases,
)
from rwmap.rewrite.printer import OncePrinter, format_line, print_all, resolve_name

__all__ = [
    "Alias",
    "AliasPattern",
    "SectionForm",
    "VARIANT_PATTERNS",
    "SUITE_PATTERNS",
    "enumerate_aliases",
    "Disambiguator",
    "DEFAULT_SUFFIX",
    "OncePrinter",
    "format_line",
    "print_all",
    "resolve_name",
]
