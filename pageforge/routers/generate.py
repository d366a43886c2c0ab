import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from pageforge import config
from pageforge.dependencies import get_store
from pageforge.errors import InputError
from pageforge.limiter import limiter
from pageforge.models.generate import GenerateRequest, GenerateResponse
from pageforge.services.generator import generate_pages
from pageforge.services.ingestor import normalize_row
from pageforge.services.store import PageStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Generation"])


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Generate one page per data row",
    description=(
        "Validates `template` against the fields of the first row, then fills the "
        "template from every row in order, assigns each page a unique slug and "
        "stores it.  Failing rows are reported individually and never abort the "
        "batch.  A template whose `variables` are not all present in the data is "
        "rejected with HTTP 400 before any page is written."
    ),
)
@limiter.limit(config.GENERATE_RATE_LIMIT)
def generate(
    request: Request,
    body: GenerateRequest,
    store: PageStore = Depends(get_store),
) -> GenerateResponse | JSONResponse:
    logger.info(
        "Generate request received",
        extra={"template_key": body.template.template_key, "row_count": len(body.rows)},
    )
    rows = [normalize_row(raw) for raw in body.rows]

    try:
        result = generate_pages(body.template, rows, store)
    except InputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    if not result.validation.is_valid:
        payload = GenerateResponse(
            success=False,
            message=result.validation.error or "Template validation failed",
            results=result,
        )
        return JSONResponse(status_code=400, content=payload.model_dump(mode="json", by_alias=True))

    return GenerateResponse(
        success=True,
        message=f"Generated {result.succeeded} pages successfully",
        results=result,
    )
