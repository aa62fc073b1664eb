"""External integrations."""

from .origin_client import (
    UNPKG_ORIGIN,
    OriginClient,
    build_origin_url,
)

__all__ = [
    "UNPKG_ORIGIN",
    "OriginClient",
    "build_origin_url",
]
