"""schema.org FAQPage JSON-LD synthesis."""

import json
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from pageforge.models.template import FaqItem

FaqLike = Union[FaqItem, Mapping[str, Any]]


def _pair(item: FaqLike) -> Tuple[str, str]:
    if isinstance(item, FaqItem):
        return item.question, item.answer
    question = item.get("q", item.get("question")) or ""
    answer = item.get("a", item.get("answer")) or ""
    return str(question), str(answer)


def build_faq_schema(faq: Optional[Iterable[FaqLike]]) -> Dict[str, Any]:
    """Build a ``FAQPage`` structured-data object from question/answer pairs.

    Pairs with a blank question or answer are skipped.  When no pair
    survives the result is an empty dict, meaning "nothing to embed".
    """
    entities = []
    for item in faq or ():
        question, answer = _pair(item)
        if not question.strip() or not answer.strip():
            continue
        entities.append(
            {
                "@type": "Question",
                "name": question,
                "acceptedAnswer": {"@type": "Answer", "text": answer},
            }
        )

    if not entities:
        return {}

    return {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": entities,
    }


def faq_schema_json(schema: Mapping[str, Any]) -> str:
    """Serialise *schema* for an inline ``<script type="application/ld+json">``.

    ``</`` is escaped so that answer text can never close the script element.
    """
    return json.dumps(schema, ensure_ascii=False).replace("</", "<\\/")
