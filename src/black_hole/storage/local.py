"""Read-only access to the local static directory."""

import asyncio
import logging
from pathlib import Path

from ..errors import AssetNotFoundError, StorageError, UnsafePathError
from ..models import LocalAsset

logger = logging.getLogger(__name__)


class StaticStore:
    """Serves files by exact relative name from a static root."""

    def __init__(self, static_dir: Path):
        """Initialize static store.

        Args:
            static_dir: Root directory of locally served files
        """
        self.static_dir = Path(static_dir)

    def ensure_root(self) -> None:
        """Create the static root directory if it is missing."""
        self.static_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, asset: LocalAsset) -> Path:
        return self.static_dir / asset.name

    def _resolve_within_root(self, asset: LocalAsset) -> Path:
        """Resolve symlinks and verify the file stays inside the root.

        Raises:
            AssetNotFoundError: If the root does not exist
            UnsafePathError: If the resolved path escapes the root
        """
        try:
            root = self.static_dir.resolve(strict=True)
        except OSError as e:
            raise AssetNotFoundError(f"Static directory missing: {self.static_dir}") from e

        target = self.path_for(asset).resolve()
        if target != root and root not in target.parents:
            raise UnsafePathError(f"Outside of static directory: {asset.name}")
        return target

    def read(self, asset: LocalAsset) -> bytes:
        """Read a local file.

        Args:
            asset: Local asset

        Returns:
            File bytes

        Raises:
            AssetNotFoundError: If the file does not exist or is a directory
            UnsafePathError: If the file resolves outside the static root
            StorageError: If the file exists but cannot be read
        """
        target = self._resolve_within_root(asset)
        try:
            return target.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise AssetNotFoundError(f"File not found: {asset.name}") from e
        except OSError as e:
            raise StorageError(f"Failed to read {asset.name}: {e}") from e

    async def aread(self, asset: LocalAsset) -> bytes:
        """Read a local file without blocking the event loop."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.read, asset)
