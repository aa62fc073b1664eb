"""Error taxonomy for request handling.

Every error carries the HTTP status it is reported with. The request handler
converts them into responses, so none of them escape to the client as a
traceback.
"""

from typing import Optional


class BlackHoleError(Exception):
    """Base class for request handling failures."""

    status_code: int = 500


class MalformedRequestError(BlackHoleError):
    """Path does not parse into a local or remote asset."""

    status_code = 400


class UnsafePathError(BlackHoleError):
    """Path would resolve outside of its filesystem root."""

    status_code = 403


class AssetNotFoundError(BlackHoleError):
    """Local file absent or remote proxying disabled."""

    status_code = 404


class CacheMissError(AssetNotFoundError):
    """No cache entry exists for a remote asset."""


class StorageError(BlackHoleError):
    """Local filesystem read or write failed."""

    status_code = 500


class FetchError(BlackHoleError):
    """Origin fetch failed with a network error or a non-success status."""

    status_code = 502

    def __init__(
        self,
        url: str,
        cause: Optional[BaseException] = None,
        upstream_status: Optional[int] = None,
    ):
        self.url = url
        self.cause = cause
        self.upstream_status = upstream_status

        if upstream_status is not None:
            message = f"Origin returned {upstream_status} for {url}"
        else:
            message = f"Failed to fetch {url}: {cause}"
        super().__init__(message)


class ConfigError(Exception):
    """Configuration file is unreadable or invalid."""
