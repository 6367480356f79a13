"""
Resolve one alias to its canonical serving path.
"""

from __future__ import annotations

from collections.abc import Sequence

from rwmap.core.errors import InvariantViolationError
from rwmap.index.models import ConstraintTemplate, ManpageVariant
from rwmap.index.service import IndexService

DEFAULT_SUFFIX = ".html"


class Disambiguator:
    """
    Narrow a name's variants by an alias template and pick the winner.

    The hint template passed to the index is always empty; it is reserved
    for tie-breaking by a referring page, which a static map cannot know.
    """

    def __init__(
        self,
        index: IndexService,
        variants: Sequence[ManpageVariant],
        suffix: str = DEFAULT_SUFFIX,
        accept_language: str = "",
    ):
        self.index = index
        self.variants = variants
        self.suffix = suffix
        self.accept_language = accept_language

    def resolve(self, key: str, template: ConstraintTemplate) -> str:
        """
        Return the serving path for ``key``.

        Raises:
            InvariantViolationError: the index has no variant for a template
                that was generated from one of ``variants``
        """
        filtered = self.index.narrow(self.accept_language, template, ConstraintTemplate(), self.variants)
        if not filtered:
            raise InvariantViolationError(
                f"Narrowing returned no variant for {key}"
            ).with_context(key=key, template=str(template), variant_count=len(self.variants))
        return self.index.serving_path(filtered[0], self.suffix)
