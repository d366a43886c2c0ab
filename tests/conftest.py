from datetime import datetime, timedelta, timezone

import pytest

from pageforge.models.page import GeneratedPage
from pageforge.models.template import PageTemplate
from pageforge.services.store import PageStore

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return PageStore()


@pytest.fixture
def template():
    return PageTemplate.model_validate(
        {
            "templateKey": "local-seo",
            "title": "{keyword} in {city}",
            "metaDescription": "Find the best {keyword} in {city}.",
            "h1": "{keyword} services in {city}",
            "variables": ["keyword", "city"],
            "sections": ["<p>Looking for {keyword} in {city}?</p>"],
            "faq": [{"q": "Do you serve {city}?", "a": "Yes, all of {city}."}],
        }
    )


def make_page(slug, template_key="minimal", minutes=0, **fields) -> GeneratedPage:
    """A stored-page fixture created *minutes* after BASE_TIME."""
    stamp = BASE_TIME + timedelta(minutes=minutes)
    values = {
        "slug": slug,
        "title": slug.replace("-", " ").title(),
        "meta_description": f"About {slug}",
        "h1": slug,
        "template_key": template_key,
        "created_at": stamp,
        "updated_at": stamp,
    }
    values.update(fields)
    return GeneratedPage(**values)
