from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pageforge.models.template import FaqItem


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GeneratedPage(BaseModel):
    """One persisted page produced from a template and a single row."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    slug: str
    title: str
    meta_description: str
    h1: str
    sections: List[str] = Field(default_factory=list)
    faq: List[FaqItem] = Field(default_factory=list)
    faq_schema: Dict[str, Any] = Field(default_factory=dict)
    vars: Dict[str, str] = Field(default_factory=dict)  # source row, kept for traceability
    template_key: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class PageRef(BaseModel):
    slug: str
    title: str


class DeployedPage(BaseModel):
    """A static copy of a generated page published under its own slug."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page_slug: str
    deploy_slug: str
    title: str = ""
    url: str
    provider: str = "local-static"
    created_at: datetime = Field(default_factory=utcnow)
