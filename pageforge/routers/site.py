"""Public site: rendered pages, landing page, sitemap and robots.txt.

Include this router last; its ``/{slug}`` route matches any single path
segment.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from pageforge.dependencies import get_store, site_base_url
from pageforge.services.feeds import build_robots, build_sitemap
from pageforge.services.renderer import error_document, render_home, render_page
from pageforge.services.store import PageStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Site"])


@router.get("/api/health", summary="Health check")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/sitemap.xml", summary="XML sitemap of all generated pages")
def sitemap(request: Request, store: PageStore = Depends(get_store)) -> Response:
    try:
        xml = build_sitemap(store, site_base_url(request))
    except Exception:
        logger.exception("Sitemap generation error")
        return PlainTextResponse("Error generating sitemap", status_code=500)
    return Response(content=xml, media_type="application/xml")


@router.get("/robots.txt", response_class=PlainTextResponse, summary="Crawler policy")
async def robots(request: Request) -> PlainTextResponse:
    return PlainTextResponse(build_robots(site_base_url(request)))


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def home(request: Request, store: PageStore = Depends(get_store)) -> HTMLResponse:
    try:
        return HTMLResponse(render_home(store, site_base_url(request)))
    except Exception:
        logger.exception("Home page error")
        document = error_document()
        return HTMLResponse(document.html, status_code=document.status_code)


@router.get("/{slug}", response_class=HTMLResponse, include_in_schema=False)
def page(slug: str, request: Request, store: PageStore = Depends(get_store)) -> HTMLResponse:
    """Serve the generated page *slug*, or the not-found document."""
    try:
        document = render_page(slug, store, site_base_url(request))
    except Exception:
        logger.exception("Page rendering error for %s", slug)
        document = error_document()
    return HTMLResponse(document.html, status_code=document.status_code)
