"""Request path classification.

A path below ``/static/`` names either a file in the local static root
(``github.css``) or a file inside a versioned npm package
(``vue@3.2.0/dist/vue.global.min.js``, ``@scope/pkg@1.0.0/index.js``).
"""

from typing import List, Union

from .errors import MalformedRequestError, UnsafePathError
from .models import LocalAsset, RemoteAsset

Asset = Union[LocalAsset, RemoteAsset]


def check_path_safety(path: str) -> List[str]:
    """Split a relative request path into segments, rejecting unsafe ones.

    Args:
        path: Request path without the leading slash

    Returns:
        Path segments

    Raises:
        UnsafePathError: On traversal, empty segments, backslashes or NUL
    """
    if "\\" in path or "\x00" in path:
        raise UnsafePathError(f"Unsafe path: {path}")
    if path.startswith("/"):
        raise UnsafePathError(f"Absolute path not allowed: {path}")

    segments = path.split("/")
    for segment in segments:
        if segment in ("", ".", ".."):
            raise UnsafePathError(f"Unsafe path: {path}")
    return segments


def classify(path: str) -> Asset:
    """Classify a request path as a local or remote asset.

    The leading segment decides: without an ``@`` the whole path is a local
    file name. With one, the leading segment is split on its last ``@`` into
    package and version, and the rest of the path is the file. Scoped
    packages (``@scope/pkg@ver/...``) use the first two segments as the
    leading segment.

    Args:
        path: Path after the ``/static/`` prefix

    Returns:
        LocalAsset or RemoteAsset

    Raises:
        MalformedRequestError: If the path is empty or a remote path lacks
            a package, version or file
        UnsafePathError: If the path could escape its root directory
    """
    path = path.lstrip("/")
    if not path:
        raise MalformedRequestError("Empty asset path")

    # A trailing slash names a directory, never a file
    is_directory = path.endswith("/")
    segments = check_path_safety(path.rstrip("/"))

    if "@" not in segments[0]:
        return LocalAsset(name=path)

    lead_count = 2 if segments[0].startswith("@") else 1
    if lead_count == 2 and (segments[0] == "@" or len(segments) < 2):
        raise MalformedRequestError(f"Incomplete scoped package path: {path}")

    lead = "/".join(segments[:lead_count])
    rest = segments[lead_count:]

    package, _, version = lead.rpartition("@")
    if not package or package.endswith("/"):
        raise MalformedRequestError(f"Missing package name: {path}")
    if not version or "/" in version:
        raise MalformedRequestError(f"Missing package version: {path}")
    # Package and version become cache directories of their own
    if any(part in (".", "..") for part in [*package.split("/"), version]):
        raise UnsafePathError(f"Unsafe package path: {path}")
    if not rest or is_directory:
        raise MalformedRequestError(f"Missing file in package path: {path}")

    return RemoteAsset(package=package, version=version, file="/".join(rest))
