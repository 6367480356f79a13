"""
Manpage index: data model, narrowing service and artifact loader.
"""

from rwmap.index.loader import load_index, parse_index
from rwmap.index.models import ConstraintTemplate, IndexDocument, ManpageVariant, SuiteAliasTable
from rwmap.index.service import Index, IndexService

__all__ = [
    "ManpageVariant",
    "ConstraintTemplate",
    "SuiteAliasTable",
    "IndexDocument",
    "Index",
    "IndexService",
    "load_index",
    "parse_index",
]
