"""Black Hole - a static asset server with a caching CDN proxy.

This package provides:
- Local static file serving from a configured directory
- Transparent proxying of versioned npm package files from unpkg
- An on-disk cache mirroring package/version/file
"""

__version__ = "0.1.0"
