"""Sitemap and robots.txt built from the current contents of the page store."""

from datetime import datetime, timezone
from typing import Optional
from xml.etree import ElementTree

from pageforge.models.page import utcnow
from pageforge.services.store import PageStore

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

_ROOT_CHANGEFREQ = "daily"
_ROOT_PRIORITY = "1.0"
_PAGE_CHANGEFREQ = "weekly"
_PAGE_PRIORITY = "0.8"

# Path prefixes crawlers must stay out of
_DISALLOWED_PREFIXES = ("/admin/", "/api/")


def _isoformat(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="seconds")


def _add_url(urlset: ElementTree.Element, loc: str, lastmod: datetime, changefreq: str, priority: str) -> None:
    url = ElementTree.SubElement(urlset, "url")
    ElementTree.SubElement(url, "loc").text = loc
    ElementTree.SubElement(url, "lastmod").text = _isoformat(lastmod)
    ElementTree.SubElement(url, "changefreq").text = changefreq
    ElementTree.SubElement(url, "priority").text = priority


def build_sitemap(store: PageStore, base_url: str, now: Optional[datetime] = None) -> str:
    """Return a sitemap XML document for the site root and every stored page.

    The root entry is always present.  Its ``lastmod`` is the newest page's
    ``updated_at``, or *now* when the store is empty.  Pages follow, most
    recently updated first.
    """
    base_url = base_url.rstrip("/")
    pages = store.list_all(sort="-updated_at")

    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    root_lastmod = pages[0].updated_at if pages else (now or utcnow())
    _add_url(urlset, f"{base_url}/", root_lastmod, _ROOT_CHANGEFREQ, _ROOT_PRIORITY)
    for page in pages:
        _add_url(urlset, f"{base_url}/{page.slug}", page.updated_at, _PAGE_CHANGEFREQ, _PAGE_PRIORITY)

    body = ElementTree.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'


def build_robots(base_url: str) -> str:
    """Return robots.txt allowing content paths and pointing at the sitemap."""
    lines = ["User-agent: *", "Allow: /"]
    lines.extend(f"Disallow: {prefix}" for prefix in _DISALLOWED_PREFIXES)
    lines.extend(["", f"Sitemap: {base_url.rstrip('/')}/sitemap.xml", ""])
    return "\n".join(lines)
