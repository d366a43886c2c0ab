"""Tests for pageforge.services.structured_data."""

import json

from pageforge.models.template import FaqItem
from pageforge.services.structured_data import build_faq_schema, faq_schema_json


class TestBuildFaqSchema:
    def test_empty_list_gives_empty_dict(self):
        assert build_faq_schema([]) == {}
        assert build_faq_schema(None) == {}

    def test_blank_pair_gives_empty_dict(self):
        assert build_faq_schema([{"q": "", "a": ""}]) == {}

    def test_single_pair(self):
        schema = build_faq_schema([{"q": "A?", "a": "B."}])
        assert schema["@context"] == "https://schema.org"
        assert schema["@type"] == "FAQPage"
        assert schema["mainEntity"] == [
            {
                "@type": "Question",
                "name": "A?",
                "acceptedAnswer": {"@type": "Answer", "text": "B."},
            }
        ]

    def test_incomplete_pairs_are_skipped(self):
        schema = build_faq_schema(
            [
                FaqItem(question="Q1", answer="A1"),
                FaqItem(question="Q2", answer=""),
                FaqItem(question="", answer="A3"),
                {"question": "Q4", "answer": "A4"},
            ]
        )
        assert [e["name"] for e in schema["mainEntity"]] == ["Q1", "Q4"]


class TestFaqSchemaJson:
    def test_script_close_tag_is_escaped(self):
        schema = build_faq_schema([{"q": "Q", "a": "</script><script>alert(1)"}])
        rendered = faq_schema_json(schema)
        assert "</script>" not in rendered
        assert json.loads(rendered)["mainEntity"][0]["acceptedAnswer"]["text"].startswith("</script>")
