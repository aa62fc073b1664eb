"""Data models for classified requests and handler responses."""

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath


@dataclass(frozen=True)
class LocalAsset:
    """A file served from the static root.

    Attributes:
        name: Path relative to the static root (may be nested)
    """

    name: str

    @property
    def filename(self) -> str:
        return PurePosixPath(self.name).name


@dataclass(frozen=True)
class RemoteAsset:
    """A file inside a versioned npm package.

    Attributes:
        package: Package name, including the scope for scoped packages
        version: Version or tag as requested
        file: Path inside the package (may be nested)
    """

    package: str
    version: str
    file: str

    @property
    def key(self) -> str:
        """Identity of the asset, as it appears in the origin URL path."""
        return f"{self.package}@{self.version}/{self.file}"

    @property
    def filename(self) -> str:
        return PurePosixPath(self.file).name


class AssetSource(str, Enum):
    """Where the body of a response came from."""

    LOCAL = "local"
    CACHE = "cache"
    ORIGIN = "origin"
    ERROR = "error"


@dataclass
class AssetResponse:
    """Outcome of handling one static request.

    Attributes:
        status: HTTP status code
        body: Response body
        content_type: MIME type of the body
        source: Where the body came from
    """

    status: int
    body: bytes
    content_type: str
    source: AssetSource

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @classmethod
    def error(cls, status: int, message: str) -> "AssetResponse":
        return cls(
            status=status,
            body=message.encode("utf-8"),
            content_type="text/plain; charset=utf-8",
            source=AssetSource.ERROR,
        )
