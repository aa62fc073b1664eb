"""Local disk cache for package files fetched from the origin."""

import asyncio
import logging
import os
import shutil
import uuid
from pathlib import Path

from ..errors import CacheMissError, StorageError, UnsafePathError
from ..models import RemoteAsset

logger = logging.getLogger(__name__)


class CacheStore:
    """Stores remote assets under ``cache_dir/package/version/file``.

    Entries never expire. A file is only ever visible at its final path once
    it has been completely written, because writes go to a temporary file in
    the same directory and are renamed into place.
    """

    def __init__(self, cache_dir: Path):
        """Initialize cache store.

        Args:
            cache_dir: Root directory for cache storage
        """
        self.cache_dir = Path(cache_dir)

    def ensure_root(self) -> None:
        """Create the cache root directory if it is missing."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, asset: RemoteAsset) -> Path:
        """Get the cache path for a remote asset.

        Args:
            asset: Remote asset

        Returns:
            Path in the cache directory, preserving nested file paths

        Raises:
            UnsafePathError: If the path resolves outside the cache directory
        """
        cache_file = self.cache_dir / asset.package / asset.version / asset.file
        if self.cache_dir.resolve() not in cache_file.resolve().parents:
            raise UnsafePathError(f"Outside of cache directory: {asset.key}")
        return cache_file

    def exists(self, asset: RemoteAsset) -> bool:
        """Check if an asset is cached.

        Args:
            asset: Remote asset

        Returns:
            True if a complete cache entry exists
        """
        return self.path_for(asset).is_file()

    def read(self, asset: RemoteAsset) -> bytes:
        """Read a cached asset.

        Args:
            asset: Remote asset

        Returns:
            Cached bytes

        Raises:
            CacheMissError: If there is no entry for the asset
            StorageError: If the entry exists but cannot be read
        """
        cache_file = self.path_for(asset)
        try:
            return cache_file.read_bytes()
        except (FileNotFoundError, IsADirectoryError) as e:
            raise CacheMissError(f"Not cached: {asset.key}") from e
        except OSError as e:
            raise StorageError(f"Failed to read cache file {cache_file}: {e}") from e

    def write(self, asset: RemoteAsset, data: bytes) -> Path:
        """Save an asset to the cache.

        Args:
            asset: Remote asset
            data: File contents

        Returns:
            Path to the saved cache file

        Raises:
            StorageError: If the file or its directories cannot be written
        """
        cache_file = self.path_for(asset)
        tmp_file = cache_file.with_name(f".{cache_file.name}.{uuid.uuid4().hex[:8]}.part")

        try:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            tmp_file.write_bytes(data)
            os.replace(tmp_file, cache_file)
        except OSError as e:
            # Clean up partial write
            try:
                tmp_file.unlink(missing_ok=True)
            except OSError:
                logger.warning(f"Could not remove partial cache file {tmp_file}")
            raise StorageError(f"Failed to write cache file {cache_file}: {e}") from e

        logger.info(f"Cached {asset.key} -> {cache_file}")
        return cache_file

    async def aread(self, asset: RemoteAsset) -> bytes:
        """Read a cached asset without blocking the event loop."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.read, asset)

    async def awrite(self, asset: RemoteAsset, data: bytes) -> Path:
        """Write a cache entry without blocking the event loop."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.write, asset, data)

    def clear(self) -> None:
        """Clear all cached data."""
        if self.cache_dir.exists():
            shutil.rmtree(self.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
