"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from . import __version__
from .config import Settings
from .handler import RequestHandler
from .routes import health, index, static
from .services.origin_client import OriginClient
from .storage.cache import CacheStore
from .storage.local import StaticStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings,
    origin_client: Optional[OriginClient] = None,
) -> FastAPI:
    """Build the application for a given configuration.

    Args:
        settings: Loaded configuration, read-only for the app's lifetime
        origin_client: Origin client to use instead of a default one

    Returns:
        FastAPI application
    """
    static_store = StaticStore(settings.proxy.static_dir)
    cache_store = CacheStore(settings.proxy.cache_dir)
    if origin_client is None:
        origin_client = OriginClient(timeout=settings.proxy.fetch_timeout)

    handler = RequestHandler(
        static_store=static_store,
        cache_store=cache_store,
        origin_client=origin_client,
        proxy_enabled=settings.proxy.enabled,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan.

        Args:
            app: FastAPI application

        Yields:
            None
        """
        # Startup
        static_store.ensure_root()
        cache_store.ensure_root()
        logger.info(f"Static directory: {static_store.static_dir}")
        logger.info(f"Cache directory: {cache_store.cache_dir}")
        logger.info(f"Proxy feature status: {settings.proxy.enabled}")

        yield

        # Shutdown
        await origin_client.aclose()

    app = FastAPI(
        title="Black Hole",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.handler = handler
    app.state.index_page = index.IndexPage(settings.server.ui_dir)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f} ms)"
        )
        return response

    app.include_router(index.router)
    app.include_router(health.router)
    app.include_router(static.router)

    return app


def main() -> None:
    """Entry point for running the server directly."""
    from .cli import app as cli_app

    cli_app()


if __name__ == "__main__":
    main()
