"""Dataset upload endpoints: parse a CSV body and report on its health."""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from pageforge import config
from pageforge.errors import ParseError
from pageforge.limiter import limiter
from pageforge.models.upload import UploadResponse
from pageforge.services.ingestor import generate_sample_csv, get_preview, parse_csv, validate_dataset

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Datasets"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Parse a CSV dataset",
    description=(
        "Send the CSV file as the raw request body (`Content-Type: text/csv`).  "
        "Returns the normalised headers, the first rows, the row count and an "
        "advisory validation report.  Bodies over 5 MB are rejected."
    ),
)
@limiter.limit(config.UPLOAD_RATE_LIMIT)
async def upload_csv(request: Request) -> UploadResponse:
    content = await request.body()
    logger.info("Upload received", extra={"size": len(content)})

    if len(content) > config.MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=413, detail="CSV file exceeds the 5 MB limit.")
    if not content.strip():
        raise HTTPException(status_code=400, detail="No CSV data uploaded")

    try:
        dataset = parse_csv(content)
    except ParseError as exc:
        logger.warning("Unparseable CSV upload: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))

    return UploadResponse(
        headers=dataset.headers,
        preview=get_preview(dataset.rows, config.PREVIEW_ROWS),
        total_rows=dataset.total_rows,
        validation=validate_dataset(dataset.rows, dataset.headers),
    )


@router.get("/sample-csv", summary="Download a sample dataset")
async def sample_csv() -> Response:
    return Response(
        content=generate_sample_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="sample-seo-data.csv"'},
    )
