"""Local static deployment of generated pages.

A deployment renders a stored page to ``<deploy_dir>/<deploy_slug>/index.html``
and records it as a :class:`DeployedPage`.  Deploy slugs are allocated with
the same collision rule as page slugs, against the deployed-page records.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from pageforge import config
from pageforge.errors import NotFoundError
from pageforge.models.page import DeployedPage
from pageforge.services.renderer import render_static
from pageforge.services.slugs import allocate_slug
from pageforge.services.store import PageStore

logger = logging.getLogger(__name__)

PROVIDER = "local-static"


def deploy_page(
    slug: str,
    store: PageStore,
    deploy_dir: Path,
    site_url: str,
    deploy_name: Optional[str] = None,
) -> DeployedPage:
    """Publish page *slug* as a static HTML file and record the deployment.

    The deploy slug is derived from *deploy_name*, else the page's
    ``keyword`` variable, else its title, else its slug.

    Raises:
        NotFoundError: if no page *slug* exists.
        EmptySeedError: if the chosen name yields no usable slug.
    """
    page = store.find_by_slug(slug)
    if page is None:
        raise NotFoundError(f"Page '{slug}' not found")

    name = (deploy_name or "").strip() or page.vars.get("keyword") or page.title or page.slug
    deploy_slug = allocate_slug(name, store.exists_deploy_slug)

    url = f"{site_url.rstrip('/')}/deployed/{deploy_slug}"
    related = store.list_by_template_key(
        page.template_key, exclude_slug=page.slug, limit=config.RELATED_PAGES_LIMIT
    )
    html = render_static(page, related, canonical_url=url)

    out_dir = Path(deploy_dir) / deploy_slug
    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / "index.html").write_text(html, encoding="utf-8")

    record = store.insert_deployed(
        DeployedPage(
            page_slug=page.slug,
            deploy_slug=deploy_slug,
            title=page.title,
            url=url,
            provider=PROVIDER,
        )
    )
    logger.info("Deployed page", extra={"slug": page.slug, "deploy_slug": deploy_slug})
    return record


def remove_deployment(deploy_slug: str, store: PageStore, deploy_dir: Path) -> None:
    """Delete the files and the record of deployment *deploy_slug*.

    Raises:
        NotFoundError: if no such deployment is recorded.
    """
    if store.find_deployed(deploy_slug) is None:
        raise NotFoundError(f"Deployed page '{deploy_slug}' not found")
    shutil.rmtree(Path(deploy_dir) / deploy_slug, ignore_errors=True)
    store.delete_deployed(deploy_slug)
    logger.info("Removed deployment %s", deploy_slug)
