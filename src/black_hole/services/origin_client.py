"""HTTP client for the unpkg CDN origin."""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ..errors import FetchError
from ..models import RemoteAsset

logger = logging.getLogger(__name__)

UNPKG_ORIGIN = "https://unpkg.com"
DEFAULT_FETCH_TIMEOUT = 30.0


def build_origin_url(asset: RemoteAsset, origin: str = UNPKG_ORIGIN) -> str:
    """Build the origin URL for a remote asset.

    Args:
        asset: Remote asset
        origin: Origin base URL

    Returns:
        URL of the form ``<origin>/<package>@<version>/<file>``
    """
    path = quote(f"{asset.package}@{asset.version}/{asset.file}", safe="/@")
    return f"{origin.rstrip('/')}/{path}"


class OriginClient:
    """Fetches package files from unpkg.

    One instance shares a connection pool across requests and must be
    closed with :meth:`aclose` on shutdown.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize origin client.

        Args:
            timeout: Total timeout in seconds for one fetch
            transport: Optional httpx transport (used to stub the network in tests)
        """
        self.origin = UNPKG_ORIGIN
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
            headers={"User-Agent": "black-hole"},
        )

    async def fetch(self, asset: RemoteAsset) -> bytes:
        """Fetch a remote asset from the origin.

        Args:
            asset: Remote asset

        Returns:
            Full response body

        Raises:
            FetchError: On a non-success status, a timeout or a network error
        """
        url = build_origin_url(asset, self.origin)
        logger.info(f"Downloading from origin: {url}")

        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Origin returned error status {e.response.status_code} for {url}")
            raise FetchError(url, cause=e, upstream_status=e.response.status_code) from e
        except httpx.TimeoutException as e:
            logger.error(f"Origin request timed out after {self.timeout}s: {url}")
            raise FetchError(url, cause=e) from e
        except httpx.RequestError as e:
            logger.error(f"Origin request failed: {e}")
            raise FetchError(url, cause=e) from e

        content = response.content
        logger.info(f"Downloaded {len(content)} bytes from {url}")
        return content

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
