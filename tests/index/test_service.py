"""Tests for rwmap.index.service and rwmap.index.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rwmap.index import ConstraintTemplate, Index, IndexService, ManpageVariant
from rwmap.index.service import suite_spellings
from tests._support.builders import variant


class TestManpageVariant:
    def test_serving_path(self):
        v = variant("Ls", "1", "en", "coreutils", "bullseye")
        assert v.serving_path(".html") == "/bullseye/coreutils/Ls.1.en.html"

    def test_major_section(self):
        assert variant("perl", section="3pm").major_section == "3"
        assert variant("ls", section="1").major_section == "1"

    def test_frozen(self):
        v = variant("ls")
        with pytest.raises(ValidationError):
            v.section = "8"

    def test_rejects_empty_fields(self):
        with pytest.raises(ValidationError):
            ManpageVariant(name="ls", section="", language="en", binarypkg="coreutils", suite="sid")


class TestConstraintTemplate:
    def test_empty(self):
        assert ConstraintTemplate().is_empty()
        assert ConstraintTemplate().fields() == {}

    def test_fields(self):
        t = ConstraintTemplate(language="de", suite="sid")
        assert t.fields() == {"language": "de", "suite": "sid"}
        assert str(t) == "{language=de, suite=sid}"

    def test_matches(self):
        v = variant("ls", section="3p", language="de")
        assert ConstraintTemplate(language="de").matches(v)
        assert not ConstraintTemplate(language="en").matches(v)
        assert not ConstraintTemplate(section="3").matches(v)
        assert ConstraintTemplate(section="3").matches(v, section_prefix=True)


class TestIndex:
    def test_from_variants_groups_by_lowercase_name(self):
        idx = Index.from_variants([variant("Xterm"), variant("xterm", language="de"), variant("ls")])
        assert list(idx.entries) == ["xterm", "ls"]
        assert [v.language for v in idx.entries["xterm"]] == ["en", "de"]
        assert idx.variant_count == 3

    def test_satisfies_protocol(self, ls_index):
        assert isinstance(ls_index, IndexService)

    def test_suites_for(self, sample_index):
        assert sample_index.suites_for("bookworm") == ["bookworm", "stable", "bookworm-backports"]
        assert sample_index.suites_for("trixie") == ["trixie", "testing"]
        assert sample_index.suites_for("sid") == ["sid"]

    def test_suite_spellings_function(self):
        assert suite_spellings({"stable": "bullseye"}, "bullseye") == ["bullseye", "stable"]

    def test_serving_path(self, ls_index):
        v = ls_index.entries["ls"][0]
        assert ls_index.serving_path(v, ".html") == v.serving_path(".html")


class TestNarrow:
    @pytest.fixture
    def variants(self):
        return [
            variant("printf", "1", "en", "coreutils", "bookworm"),
            variant("printf", "3", "en", "manpages-dev", "bookworm"),
            variant("printf", "3p", "de", "manpages-de-dev", "trixie"),
        ]

    def narrow(self, variants, template=ConstraintTemplate(), hint=ConstraintTemplate(), lang=""):
        return Index().narrow(lang, template, hint, variants)

    def test_empty_template_keeps_order(self, variants):
        assert self.narrow(variants) == variants

    def test_exact_section_preferred(self, variants):
        assert self.narrow(variants, ConstraintTemplate(section="3")) == [variants[1]]

    def test_section_prefix_fallback(self, variants):
        assert self.narrow(variants, ConstraintTemplate(section="3", suite="trixie")) == [variants[2]]

    def test_multiple_fields(self, variants):
        t = ConstraintTemplate(language="en", binarypkg="coreutils", suite="bookworm")
        assert self.narrow(variants, t) == [variants[0]]

    def test_no_match_returns_empty(self, variants):
        assert self.narrow(variants, ConstraintTemplate(language="fr")) == []

    def test_accept_language_reorders(self, variants):
        result = self.narrow(variants, lang="de")
        assert result[0] == variants[2]
        assert len(result) == 3

    def test_accept_language_ignored_when_language_constrained(self, variants):
        result = self.narrow(variants, ConstraintTemplate(language="en"), lang="de")
        assert result == variants[:2]

    def test_hint_reorders_without_filtering(self, variants):
        result = self.narrow(variants, hint=ConstraintTemplate(suite="trixie"))
        assert result == [variants[2], variants[0], variants[1]]
