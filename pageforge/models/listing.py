from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageSummary(_CamelModel):
    slug: str
    title: str
    meta_description: str
    template_key: str
    created_at: datetime


class Pagination(_CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool


class PagesResponse(_CamelModel):
    pages: List[PageSummary]
    pagination: Pagination
    template_keys: List[str]


class TemplateCount(_CamelModel):
    template_key: str
    count: int


class StatsResponse(_CamelModel):
    total_pages: int
    pages_by_template: List[TemplateCount]
    recent_pages: List[PageSummary]


class DeleteResponse(_CamelModel):
    message: str
    deleted_count: int
