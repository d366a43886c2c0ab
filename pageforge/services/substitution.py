"""Flat ``{field}`` placeholder substitution.

Tokens are resolved in a single regex pass, so a substituted value is never
scanned again and the result does not depend on the order of the row's
fields.  Tokens naming fields the row does not have are left as-is.
"""

import re
from typing import Any, List, NamedTuple

from pageforge.models.template import FaqItem, PageTemplate, Row

# ``{name}`` with no nested braces; anything else is literal text.
_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


class RenderedContent(NamedTuple):
    title: str
    meta_description: str
    h1: str
    sections: List[str]
    faq: List[FaqItem]
    template_key: str


def fill(text: str, row: Row) -> str:
    """Replace every ``{field}`` token in *text* whose field is in *row*.

    A falsy value substitutes as an empty string.
    """
    if not text or not isinstance(text, str):
        return text

    def _replace(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key not in row:
            return match.group(0)
        value = row[key]
        return str(value) if value else ""

    return _PLACEHOLDER_RE.sub(_replace, text)


def substitute(value: Any, row: Row) -> Any:
    """Apply :func:`fill` throughout *value*, preserving its shape.

    Strings are filled; lists, tuples and dict values are walked
    recursively; :class:`FaqItem` pairs are filled field by field.  Any other
    value is returned unchanged.
    """
    if isinstance(value, str):
        return fill(value, row)
    if isinstance(value, FaqItem):
        return FaqItem(question=fill(value.question, row), answer=fill(value.answer, row))
    if isinstance(value, list):
        return [substitute(item, row) for item in value]
    if isinstance(value, tuple):
        return tuple(substitute(item, row) for item in value)
    if isinstance(value, dict):
        return {key: substitute(item, row) for key, item in value.items()}
    return value


def render_template(template: PageTemplate, row: Row) -> RenderedContent:
    """Fill every placeholder-bearing field of *template* from *row*."""
    return RenderedContent(
        title=fill(template.title, row),
        meta_description=fill(template.meta_description, row),
        h1=fill(template.h1, row),
        sections=substitute(list(template.sections), row),
        faq=substitute(list(template.faq), row),
        template_key=template.template_key,
    )
