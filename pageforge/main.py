import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from pageforge import config
from pageforge.limiter import limiter
from pageforge.routers.deploy import router as deploy_router
from pageforge.routers.generate import router as generate_router
from pageforge.routers.pages import router as pages_router
from pageforge.routers.site import router as site_router
from pageforge.routers.upload import router as upload_router
from pageforge.services.store import create_store

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": config.LOG_LEVEL, "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Pageforge – Programmatic SEO Pages",
    description=(
        "Turns a CSV dataset and a page template into uniquely addressed, "
        "crawlable landing pages, with sitemap and robots.txt to match."
    ),
    version="1.0.0",
)

app.state.store = create_store()
app.state.deploy_dir = config.DEPLOY_DIR

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(upload_router)
app.include_router(generate_router)
app.include_router(pages_router)
app.include_router(deploy_router)
# Catch-all /{slug} lives here, so it goes last.
app.include_router(site_router)
