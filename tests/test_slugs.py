"""Tests for pageforge.services.slugs."""

import pytest

from pageforge.errors import EmptySeedError, RowError
from pageforge.services.slugs import allocate_slug, seed_for_row, slugify


class TestSlugify:
    def test_lowercases_and_hyphenates(self):
        assert slugify("SEO Services") == "seo-services"

    def test_strips_punctuation(self):
        assert slugify("Plumber's (24/7) help!") == "plumbers-247-help"

    def test_collapses_separators(self):
        assert slugify("  a  --  b__c ") == "a-b-c"

    def test_transliterates_accents(self):
        assert slugify("Café Zürich") == "cafe-zurich"

    def test_punctuation_only_is_empty(self):
        assert slugify("!!!") == ""
        assert slugify("") == ""


class TestAllocateSlug:
    def test_free_base_slug(self):
        assert allocate_slug("Foo", lambda s: False) == "foo"

    def test_increments_until_free(self):
        taken = {"foo", "foo-1"}
        assert allocate_slug("Foo", taken.__contains__) == "foo-2"

    def test_gap_in_suffixes_is_reused(self):
        taken = {"foo", "foo-2"}
        assert allocate_slug("foo", taken.__contains__) == "foo-1"

    def test_checks_are_sequential_in_order(self):
        seen = []

        def exists(candidate):
            seen.append(candidate)
            return len(seen) < 4

        assert allocate_slug("bar", exists) == "bar-3"
        assert seen == ["bar", "bar-1", "bar-2", "bar-3"]

    def test_empty_seed_raises(self):
        with pytest.raises(EmptySeedError):
            allocate_slug("?!", lambda s: False)

    def test_empty_seed_is_a_row_error(self):
        with pytest.raises(RowError):
            allocate_slug("", lambda s: False)


class TestSeedForRow:
    def test_prefers_keyword(self):
        assert seed_for_row({"city": "Reno", "keyword": "plumber"}) == "plumber"

    def test_falls_back_to_first_field(self):
        assert seed_for_row({"city": "Reno", "brand": "Acme"}) == "Reno"

    def test_blank_keyword_falls_back(self):
        assert seed_for_row({"city": "Reno", "keyword": ""}) == "Reno"

    def test_empty_row(self):
        assert seed_for_row({}) == ""
