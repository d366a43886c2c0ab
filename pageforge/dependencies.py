"""Request-scoped accessors for application state."""

from pathlib import Path

from fastapi import Request

from pageforge import config
from pageforge.services.store import PageStore


def get_store(request: Request) -> PageStore:
    return request.app.state.store


def get_deploy_dir(request: Request) -> Path:
    return request.app.state.deploy_dir


def site_base_url(request: Request) -> str:
    """Absolute base URL of the public site, without a trailing slash.

    ``SITE_URL`` wins when configured; otherwise the host the request was
    addressed to is used.
    """
    return config.SITE_URL or str(request.base_url).rstrip("/")
