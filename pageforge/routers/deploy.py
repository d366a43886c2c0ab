import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from pageforge import config
from pageforge.dependencies import get_deploy_dir, get_store, site_base_url
from pageforge.errors import ConflictError, EmptySeedError, NotFoundError
from pageforge.limiter import limiter
from pageforge.models.deploy import DeployRequest, DeployResponse
from pageforge.models.listing import DeleteResponse
from pageforge.models.page import DeployedPage
from pageforge.services.deployer import deploy_page, remove_deployment
from pageforge.services.store import PageStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Deployment"])


@router.post(
    "/deploy/{slug}",
    response_model=DeployResponse,
    summary="Publish a page as static HTML",
    description=(
        "Renders the page and writes it to `<DEPLOY_DIR>/<deploySlug>/index.html`. "
        "The deploy slug comes from `deployName`, the page's `keyword` or its title "
        "and is made unique among existing deployments."
    ),
)
@limiter.limit(config.DEPLOY_RATE_LIMIT)
def deploy(
    request: Request,
    slug: str,
    body: Optional[DeployRequest] = None,
    store: PageStore = Depends(get_store),
    deploy_dir: Path = Depends(get_deploy_dir),
) -> DeployResponse:
    try:
        record = deploy_page(
            slug,
            store,
            deploy_dir,
            site_url=site_base_url(request),
            deploy_name=body.deploy_name if body else None,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except EmptySeedError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except OSError as exc:
        logger.error("Deploy of %s failed: %s", slug, exc)
        raise HTTPException(status_code=500, detail="Deploy failed")

    return DeployResponse(url=record.url, deploy_slug=record.deploy_slug)


@router.get("/deployed", response_model=List[DeployedPage], summary="List deployed pages")
def list_deployed(store: PageStore = Depends(get_store)) -> List[DeployedPage]:
    return store.list_deployed()


@router.delete("/deployed/{deploy_slug}", response_model=DeleteResponse, summary="Remove a deployment")
def delete_deployed(
    deploy_slug: str,
    store: PageStore = Depends(get_store),
    deploy_dir: Path = Depends(get_deploy_dir),
) -> DeleteResponse:
    try:
        remove_deployment(deploy_slug, store, deploy_dir)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return DeleteResponse(message="Deleted deployed page", deleted_count=1)
