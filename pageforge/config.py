"""Runtime settings, read once from the environment at import time."""

import os
from pathlib import Path

SITE_NAME: str = os.environ.get("SITE_NAME", "Programmatic SEO Tool")

# Absolute site URL used for canonical links and feeds.  Empty means
# "derive from the incoming request".
SITE_URL: str = os.environ.get("SITE_URL", "").rstrip("/")

# JSON file backing the page store.  Empty keeps everything in memory.
STORE_PATH: str = os.environ.get("STORE_PATH", "")

DEPLOY_DIR: Path = Path(os.environ.get("DEPLOY_DIR", "deployed"))

LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

RELATED_PAGES_LIMIT = 6
RECENT_PAGES_LIMIT = 6
PREVIEW_ROWS = 10

MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5 MB

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

GENERATE_RATE_LIMIT: str = os.environ.get("GENERATE_RATE_LIMIT", "30/minute")
UPLOAD_RATE_LIMIT: str = os.environ.get("UPLOAD_RATE_LIMIT", "60/minute")
DEPLOY_RATE_LIMIT: str = os.environ.get("DEPLOY_RATE_LIMIT", "30/minute")
