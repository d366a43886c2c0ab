"""Render dispatch: stored page -> full HTML document in one of several layouts.

Rendering reads the store and nothing else, and writes nothing.  The same
stored state and base URL always give the same document.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from pageforge import config
from pageforge.models.page import GeneratedPage
from pageforge.services.sanitizer import sanitize_fragment
from pageforge.services.store import PageStore
from pageforge.services.structured_data import faq_schema_json

logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


class RenderVariant(str, Enum):
    BASIC = "basic"
    SERVICE = "service"
    DARK = "dark"
    FAQ = "faq"


VARIANT_VIEWS: Dict[RenderVariant, str] = {
    RenderVariant.BASIC: "page_minimal.html",
    RenderVariant.SERVICE: "page_modern_blue.html",
    RenderVariant.DARK: "page_dark_pastel.html",
    RenderVariant.FAQ: "page_faq_rich.html",
}

# templateKey -> layout.  A new layout is one entry here plus one template.
TEMPLATE_MAP: Dict[str, RenderVariant] = {
    "minimal": RenderVariant.BASIC,
    "local-seo": RenderVariant.BASIC,
    "service-landing": RenderVariant.SERVICE,
    "modern-blue": RenderVariant.SERVICE,
    "dark-pastel": RenderVariant.DARK,
    "faq-rich": RenderVariant.FAQ,
}

DEFAULT_TEMPLATE_KEY = "minimal"

# Fixed copy for the landing page
_HOME_SECTIONS = (
    "Transform your SEO strategy with automated page generation. Upload CSV data "
    "and generate hundreds of optimized landing pages in minutes.",
    "Perfect for local businesses, service providers, and marketers needing "
    "location or product specific landing pages at scale.",
    "Each generated page includes structured data, meta tags, and clean semantic "
    "HTML built to rank.",
)
_HOME_FAQ = (
    ("How does programmatic SEO work?",
     "Upload a CSV + JSON template. Each row becomes a page with variables filled."),
    ("Is the output SEO friendly?",
     "Yes. Titles, meta descriptions, JSON-LD (FAQ) and clean markup are included."),
    ("Can I add custom variables?",
     "Add headers to your CSV and reference them in the JSON template with {variable} placeholders."),
)


class RenderedDocument(NamedTuple):
    status_code: int
    html: str


def resolve_variant(template_key: Optional[str]) -> RenderVariant:
    """Map *template_key* to a layout; unknown keys get the ``minimal`` layout."""
    return TEMPLATE_MAP.get(template_key or "", TEMPLATE_MAP[DEFAULT_TEMPLATE_KEY])


def _page_context(page: GeneratedPage, related: List[GeneratedPage], canonical_url: str) -> dict:
    return {
        "site_name": config.SITE_NAME,
        "page": page,
        "title": page.title,
        "description": page.meta_description,
        "canonical_url": canonical_url,
        "sections": [Markup(sanitize_fragment(s)) for s in page.sections],
        "faq": [item for item in page.faq if item.question and item.answer],
        "related": related,
        "faq_schema_json": faq_schema_json(page.faq_schema) if page.faq_schema else "",
        "year": page.updated_at.year,
    }


def render_static(page: GeneratedPage, related: List[GeneratedPage], canonical_url: str) -> str:
    """Render *page* as a complete HTML document with the given canonical URL."""
    variant = resolve_variant(page.template_key)
    context = _page_context(page, related, canonical_url)
    context["variant"] = variant.value
    return _env.get_template(VARIANT_VIEWS[variant]).render(**context)


def not_found_document(slug: str) -> RenderedDocument:
    html = _env.get_template("not_found.html").render(
        site_name=config.SITE_NAME,
        slug=slug,
        title="Page Not Found",
        description="",
        variant=RenderVariant.BASIC.value,
    )
    return RenderedDocument(status_code=404, html=html)


def error_document() -> RenderedDocument:
    html = _env.get_template("error.html").render(
        site_name=config.SITE_NAME,
        title="Server Error",
        description="",
        variant=RenderVariant.BASIC.value,
    )
    return RenderedDocument(status_code=500, html=html)


def render_page(slug: str, store: PageStore, base_url: str) -> RenderedDocument:
    """Render the stored page *slug* for a site served at *base_url*.

    A missing page (including one deleted while this request was in flight)
    yields the 404 document rather than an exception.
    """
    page = store.find_by_slug(slug)
    if page is None:
        logger.info("Page not found: %s", slug)
        return not_found_document(slug)

    related = store.list_by_template_key(
        page.template_key, exclude_slug=page.slug, limit=config.RELATED_PAGES_LIMIT
    )
    canonical_url = f"{base_url.rstrip('/')}/{page.slug}"
    return RenderedDocument(status_code=200, html=render_static(page, related, canonical_url))


def render_home(store: PageStore, base_url: str) -> str:
    """Render the landing page listing the most recently generated pages."""
    recent = store.list_all(sort="-created_at", limit=config.RECENT_PAGES_LIMIT)
    return _env.get_template("home.html").render(
        site_name=config.SITE_NAME,
        title=f"{config.SITE_NAME} - Generate SEO Pages at Scale",
        description="Create hundreds of SEO-optimized landing pages automatically.",
        canonical_url=f"{base_url.rstrip('/')}/",
        variant=RenderVariant.BASIC.value,
        sections=_HOME_SECTIONS,
        faq=[{"question": q, "answer": a} for q, a in _HOME_FAQ],
        recent=recent,
    )
