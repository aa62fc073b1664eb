"""Index page endpoint."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

logger = logging.getLogger(__name__)
router = APIRouter()


class IndexPage:
    """Serves ``index.html`` from the UI directory, kept in memory once read."""

    def __init__(self, ui_dir: Path):
        """Initialize index page.

        Args:
            ui_dir: Directory containing index.html
        """
        self.index_path = Path(ui_dir) / "index.html"
        self._content: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def is_cached(self) -> bool:
        return self._content is not None

    async def load(self) -> Optional[str]:
        """Return the page contents, reading the file on first use.

        Returns:
            HTML text, or None if the file cannot be read
        """
        if self._content is not None:
            logger.debug("Using cached index.html")
            return self._content

        async with self._lock:
            if self._content is not None:
                return self._content

            logger.info(f"Reading index.html from file: {self.index_path}")
            loop = asyncio.get_event_loop()
            try:
                content = await loop.run_in_executor(
                    None, lambda: self.index_path.read_text(encoding="utf-8")
                )
            except OSError as e:
                logger.error(f"Failed to read index.html: {e}")
                return None

            self._content = content
            return content


def get_index_page(request: Request) -> IndexPage:
    """Return the index page built for this app."""
    return request.app.state.index_page


@router.get("/")
async def index(page: IndexPage = Depends(get_index_page)) -> Response:
    """Serve the UI index page."""
    content = await page.load()
    if content is None:
        return PlainTextResponse("404 - index.html file not found", status_code=404)
    return HTMLResponse(content)
