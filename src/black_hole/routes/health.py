"""Health check endpoint."""

import logging
import os
from pathlib import Path

from fastapi import APIRouter, Request

from .. import __version__

logger = logging.getLogger(__name__)
router = APIRouter()


def check_dir_access(directory: Path, writable: bool = False) -> dict:
    """Check if a directory exists and is accessible.

    Args:
        directory: Directory to check
        writable: Also require write access

    Returns:
        Status dictionary
    """
    if not directory.is_dir():
        return {"status": "missing", "path": str(directory)}

    mode = os.R_OK | os.X_OK
    if writable:
        mode |= os.W_OK
    if not os.access(directory, mode):
        return {"status": "unhealthy", "path": str(directory), "error": "permission denied"}
    return {"status": "healthy", "path": str(directory)}


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Health check endpoint.

    Returns:
        Service health status
    """
    settings = request.app.state.settings
    handler = request.app.state.handler

    return {
        "status": "healthy",
        "version": __version__,
        "proxy": {
            "enabled": settings.proxy.enabled,
            "origin": handler.origin_client.origin,
            "inflight_fetches": len(handler.inflight),
        },
        "services": {
            "static": check_dir_access(settings.proxy.static_dir),
            "cache": check_dir_access(settings.proxy.cache_dir, writable=True),
        },
    }
