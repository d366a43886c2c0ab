"""Admin endpoints for browsing, inspecting and deleting generated pages."""

import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from pageforge import config
from pageforge.dependencies import get_store
from pageforge.models.listing import (
    DeleteResponse,
    PageSummary,
    PagesResponse,
    Pagination,
    StatsResponse,
    TemplateCount,
)
from pageforge.models.page import GeneratedPage
from pageforge.services.store import PageStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Pages"])

_RECENT_STATS_PAGES = 5


def _summary(page: GeneratedPage) -> PageSummary:
    return PageSummary(
        slug=page.slug,
        title=page.title,
        meta_description=page.meta_description,
        template_key=page.template_key,
        created_at=page.created_at,
    )


@router.get("/pages", response_model=PagesResponse, summary="List generated pages")
def list_pages(
    page: int = Query(default=1, ge=1, description="1-based page number."),
    limit: int = Query(default=config.DEFAULT_PAGE_SIZE, ge=1, le=config.MAX_PAGE_SIZE),
    template_key: Optional[str] = Query(default=None, alias="templateKey"),
    store: PageStore = Depends(get_store),
) -> PagesResponse:
    """Newest pages first, optionally restricted to one template key."""
    skip = (page - 1) * limit
    total = store.count_all(template_key=template_key)
    items = store.list_all(sort="-created_at", skip=skip, limit=limit, template_key=template_key)

    return PagesResponse(
        pages=[_summary(p) for p in items],
        pagination=Pagination(
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_items=total,
            items_per_page=limit,
            has_next_page=skip + limit < total,
            has_prev_page=page > 1,
        ),
        template_keys=store.template_keys(),
    )


@router.get("/pages/{slug}", response_model=GeneratedPage, summary="Get one generated page")
def get_page(slug: str, store: PageStore = Depends(get_store)) -> GeneratedPage:
    page = store.find_by_slug(slug)
    if page is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return page


@router.delete("/pages/{slug}", response_model=DeleteResponse, summary="Delete one page")
def delete_page(slug: str, store: PageStore = Depends(get_store)) -> DeleteResponse:
    if not store.delete_by_slug(slug):
        raise HTTPException(status_code=404, detail="Page not found")
    logger.info("Deleted page %s", slug)
    return DeleteResponse(message="Page deleted successfully", deleted_count=1)


@router.delete("/pages", response_model=DeleteResponse, summary="Delete all pages of a template")
def delete_pages(
    template_key: Optional[str] = Query(default=None, alias="templateKey"),
    store: PageStore = Depends(get_store),
) -> DeleteResponse:
    if not template_key:
        raise HTTPException(status_code=400, detail="Template key is required for bulk deletion")
    deleted = store.delete_by_template_key(template_key)
    logger.info("Bulk delete", extra={"template_key": template_key, "deleted": deleted})
    return DeleteResponse(
        message=f"Deleted {deleted} pages with template key: {template_key}",
        deleted_count=deleted,
    )


@router.get("/stats", response_model=StatsResponse, summary="Dashboard statistics")
def stats(store: PageStore = Depends(get_store)) -> StatsResponse:
    return StatsResponse(
        total_pages=store.count_all(),
        pages_by_template=[
            TemplateCount(template_key=key, count=count)
            for key, count in store.count_by_template_key()
        ],
        recent_pages=[_summary(p) for p in store.list_all(sort="-created_at", limit=_RECENT_STATS_PAGES)],
    )
