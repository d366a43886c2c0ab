from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# One record of input data: normalised field name -> trimmed value.
Row = Dict[str, str]


class FaqItem(BaseModel):
    """A question/answer pair; ``q`` and ``a`` on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(default="", alias="q")
    answer: str = Field(default="", alias="a")


class PageTemplate(BaseModel):
    """Declarative page skeleton with ``{field}`` placeholders.

    ``variables`` is the manifest of row fields the template needs.  It is
    what validation checks against the dataset; the placeholders themselves
    are never parsed for validation.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    template_key: str = Field(min_length=1)
    title: str
    meta_description: str
    h1: str
    variables: List[str]
    sections: List[str] = Field(default_factory=list)
    faq: List[FaqItem] = Field(default_factory=list)
