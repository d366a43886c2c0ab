"""Tests for pageforge.services.substitution."""

from pageforge.models.template import FaqItem, PageTemplate
from pageforge.services.substitution import fill, render_template, substitute


class TestFill:
    def test_replaces_known_fields(self):
        assert fill("{keyword} in {city}", {"keyword": "plumber", "city": "Reno"}) == "plumber in Reno"

    def test_repeated_tokens(self):
        assert fill("{a}-{a}", {"a": "x"}) == "x-x"

    def test_unknown_tokens_left_verbatim(self):
        assert fill("{keyword} near {zip}", {"keyword": "plumber"}) == "plumber near {zip}"

    def test_falsy_value_becomes_empty(self):
        assert fill("[{city}]", {"city": ""}) == "[]"

    def test_values_are_not_rescanned(self):
        row = {"a": "{b}", "b": "boom"}
        assert fill("{a}", row) == "{b}"

    def test_order_independent(self):
        text = "{a} {b}"
        assert fill(text, {"a": "1", "b": "2"}) == fill(text, {"b": "2", "a": "1"})

    def test_idempotent_for_absent_fields(self):
        row = {"keyword": "plumber"}
        once = fill("{keyword} in {city} {}", row)
        assert fill(once, row) == once

    def test_matching_is_case_sensitive(self):
        assert fill("{City}", {"city": "Reno"}) == "{City}"

    def test_empty_and_non_string(self):
        assert fill("", {"a": "x"}) == ""
        assert fill(None, {"a": "x"}) is None


class TestSubstitute:
    def test_list_shape_preserved(self):
        assert substitute(["{a}", "b", "{c}"], {"a": "1"}) == ["1", "b", "{c}"]

    def test_nested_dict(self):
        value = {"q": "{a}?", "nested": {"items": ["{a}", 3]}}
        assert substitute(value, {"a": "x"}) == {"q": "x?", "nested": {"items": ["x", 3]}}

    def test_tuple_and_scalars(self):
        assert substitute(("{a}", 1, None), {"a": "x"}) == ("x", 1, None)

    def test_faq_item(self):
        item = substitute(FaqItem(question="Best {k}?", answer="{k} A"), {"k": "plumber"})
        assert item.question == "Best plumber?"
        assert item.answer == "plumber A"


class TestRenderTemplate:
    def test_fills_every_field(self):
        template = PageTemplate.model_validate(
            {
                "templateKey": "faq-rich",
                "title": "{keyword} in {city}",
                "metaDescription": "Top {keyword} in {city}",
                "h1": "{keyword} ({city})",
                "variables": ["keyword", "city"],
                "sections": ["About {city}", "Call {brand}"],
                "faq": [{"q": "Is {keyword} available?", "a": "Yes in {city}."}],
            }
        )
        content = render_template(template, {"keyword": "plumber", "city": "Reno"})
        assert content.title == "plumber in Reno"
        assert content.meta_description == "Top plumber in Reno"
        assert content.h1 == "plumber (Reno)"
        assert content.sections == ["About Reno", "Call {brand}"]
        assert content.faq[0].question == "Is plumber available?"
        assert content.faq[0].answer == "Yes in Reno."
        assert content.template_key == "faq-rich"

    def test_template_itself_is_not_mutated(self):
        template = PageTemplate.model_validate(
            {
                "templateKey": "minimal",
                "title": "{a}",
                "metaDescription": "",
                "h1": "",
                "variables": [],
                "faq": [{"q": "{a}", "a": "{a}"}],
            }
        )
        render_template(template, {"a": "x"})
        assert template.faq[0].question == "{a}"
