"""Static request handling: classify, then serve local or cached/fetched files."""

import asyncio
import logging
from typing import Awaitable, Callable, Dict

from . import content_types
from .classifier import classify
from .errors import (
    AssetNotFoundError,
    BlackHoleError,
    CacheMissError,
    StorageError,
)
from .models import AssetResponse, AssetSource, LocalAsset, RemoteAsset
from .services.origin_client import OriginClient
from .storage.cache import CacheStore
from .storage.local import StaticStore

logger = logging.getLogger(__name__)


class InflightFetches:
    """Shares one running fetch between concurrent requests for the same asset.

    The first request for a key starts a task; later requests for the same
    key await that task until it finishes. Finished tasks are dropped, so a
    failure is reported to everyone waiting on it but not remembered.
    """

    def __init__(self):
        self._tasks: Dict[str, "asyncio.Task[bytes]"] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, key: str) -> bool:
        return key in self._tasks

    async def run(self, key: str, fetch: Callable[[], Awaitable[bytes]]) -> bytes:
        """Run ``fetch`` for ``key`` unless a fetch for it is already running.

        Args:
            key: Asset identity
            fetch: Coroutine factory performing the fetch and cache write

        Returns:
            Bytes produced by the shared fetch
        """
        # No await between lookup and insert, so the check-then-set is atomic
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(fetch())
            self._tasks[key] = task
            task.add_done_callback(lambda done: self._finished(key, done))
        else:
            logger.debug(f"Joining in-flight fetch for {key}")

        # Shielded so one disconnecting requester does not cancel the others
        return await asyncio.shield(task)

    def _finished(self, key: str, task: "asyncio.Task[bytes]") -> None:
        self._tasks.pop(key, None)
        # Mark the outcome as retrieved even if every waiter was cancelled
        if not task.cancelled():
            task.exception()


class RequestHandler:
    """Turns a ``/static/`` request path into an :class:`AssetResponse`.

    All failures are converted to error responses here; nothing is retried.
    """

    def __init__(
        self,
        static_store: StaticStore,
        cache_store: CacheStore,
        origin_client: OriginClient,
        proxy_enabled: bool = False,
    ):
        """Initialize request handler.

        Args:
            static_store: Local static file store
            cache_store: Remote asset cache
            origin_client: Client used on cache misses
            proxy_enabled: Whether remote package paths are served at all
        """
        self.static_store = static_store
        self.cache_store = cache_store
        self.origin_client = origin_client
        self.proxy_enabled = proxy_enabled
        self.inflight = InflightFetches()

    async def handle(self, path: str) -> AssetResponse:
        """Handle one static request.

        Args:
            path: Path after the ``/static/`` prefix

        Returns:
            AssetResponse with status, body and content type
        """
        try:
            asset = classify(path)
            if isinstance(asset, LocalAsset):
                return await self._serve_local(asset)
            return await self._serve_remote(asset)
        except BlackHoleError as e:
            log = logger.error if e.status_code >= 500 else logger.warning
            log(f"{e.status_code} for {path!r}: {e}")
            return AssetResponse.error(e.status_code, str(e))

    async def _serve_local(self, asset: LocalAsset) -> AssetResponse:
        logger.info(f"Looking for local file: {asset.name}")
        body = await self.static_store.aread(asset)
        logger.info(f"Returned local file: {asset.name}")
        return self._ok(body, asset.filename, AssetSource.LOCAL)

    async def _serve_remote(self, asset: RemoteAsset) -> AssetResponse:
        if not self.proxy_enabled:
            raise AssetNotFoundError(f"Proxy disabled, not serving {asset.key}")

        try:
            body = await self.cache_store.aread(asset)
        except CacheMissError:
            pass
        except StorageError as e:
            logger.warning(f"Cache read failed for {asset.key}, refetching: {e}")
        else:
            logger.info(f"Cache hit: {asset.key}")
            return self._ok(body, asset.filename, AssetSource.CACHE)

        logger.info(f"Cache miss: {asset.key}")
        body = await self.inflight.run(asset.key, lambda: self._fill_cache(asset))
        return self._ok(body, asset.filename, AssetSource.ORIGIN)

    async def _fill_cache(self, asset: RemoteAsset) -> bytes:
        """Fetch an asset and persist it; a failed write still returns the bytes."""
        body = await self.origin_client.fetch(asset)

        try:
            await self.cache_store.awrite(asset, body)
        except StorageError as e:
            logger.warning(f"Serving {asset.key} uncached: {e}")
        return body

    @staticmethod
    def _ok(body: bytes, filename: str, source: AssetSource) -> AssetResponse:
        return AssetResponse(
            status=200,
            body=body,
            content_type=content_types.type_for(filename),
            source=source,
        )
