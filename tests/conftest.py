"""Shared fixtures for black-hole tests."""

from pathlib import Path
from typing import Dict, List, Union

import httpx
import pytest
from black_hole.config import LogSettings, ProxySettings, ServerSettings, Settings
from black_hole.services.origin_client import OriginClient


class FakeOrigin:
    """Stands in for unpkg through an httpx MockTransport.

    Responses are keyed by URL path; unknown paths return 404. Every request
    is recorded so tests can count network calls.
    """

    def __init__(self):
        self.responses: Dict[str, Union[httpx.Response, Exception]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, content: bytes, status_code: int = 200) -> None:
        self.responses[path] = httpx.Response(status_code, content=content)

    def fail(self, path: str, error: Exception) -> None:
        self.responses[path] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.get(request.url.path)
        if response is None:
            return httpx.Response(404, content=b"not found")
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def client(self, timeout: float = 5.0) -> OriginClient:
        return OriginClient(timeout=timeout, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_origin():
    """Create a fake origin with no files."""
    return FakeOrigin()


@pytest.fixture
def static_dir(tmp_path) -> Path:
    """Create a static directory with a stylesheet."""
    directory = tmp_path / "static"
    directory.mkdir()
    (directory / "github.css").write_text("body { color: #24292e; }")
    return directory


@pytest.fixture
def cache_dir(tmp_path) -> Path:
    """Return a cache directory path that does not exist yet."""
    return tmp_path / "cache"


@pytest.fixture
def ui_dir(tmp_path) -> Path:
    """Create a UI directory with an index page."""
    directory = tmp_path / "ui"
    directory.mkdir()
    (directory / "index.html").write_text("<h1>Black Hole</h1>", encoding="utf-8")
    return directory


@pytest.fixture
def settings(static_dir, cache_dir, ui_dir) -> Settings:
    """Create settings with proxying enabled and temp directories."""
    return Settings(
        proxy=ProxySettings(enabled=True, static_dir=static_dir, cache_dir=cache_dir),
        log=LogSettings(enabled=False),
        server=ServerSettings(ui_dir=ui_dir),
    )
