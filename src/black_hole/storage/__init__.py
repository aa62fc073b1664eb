"""Storage layer for the static root and the package cache."""

from .cache import CacheStore
from .local import StaticStore

__all__ = ["CacheStore", "StaticStore"]
