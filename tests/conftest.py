"""Test configuration and fixtures for yadb."""

import os
import tempfile
import threading
import time
from collections.abc import Callable, Generator
from pathlib import Path

import httpx
import pytest


class MockSite:
    """Deterministic in-process web server built on httpx.MockTransport."""

    def __init__(
        self,
        routes: dict[str, object] | None = None,
        default_status: int = 404,
        delay: float = 0.0,
    ):
        self.routes: dict[str, object] = dict(routes or {})
        self.default_status = default_status
        self.delay = delay
        self.requests: list[str] = []
        self._lock = threading.Lock()

    def directory(self, path: str) -> "MockSite":
        """Serve ``path`` as a directory: redirect to ``path/`` which answers 200."""
        self.routes[path] = (301, {"Location": path + "/"})
        self.routes[path + "/"] = 200
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request.url.path)
        if self.delay:
            time.sleep(self.delay)
        route = self.routes.get(request.url.path, self.default_status)
        if callable(route):
            return route(request)
        if isinstance(route, tuple):
            status, headers = route
            return httpx.Response(status, headers=headers, text="moved")
        return httpx.Response(route, text=f"status {route}")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requested(self) -> list[str]:
        with self._lock:
            return list(self.requests)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path: Path) -> Generator[None, None, None]:
    """Keep user config files and YADB_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("YADB_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(workdir)
    yield


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_wordlist(temp_dir: Path) -> Callable[[list[str]], Path]:
    """Write words to a wordlist file and return its path."""

    def _make(words: list[str], name: str = "words.txt") -> Path:
        path = temp_dir / name
        path.write_text("\n".join(words) + "\n", encoding="utf-8")
        return path

    return _make


@pytest.fixture
def site() -> MockSite:
    """Mock target answering 404 for everything not routed."""
    return MockSite()


@pytest.fixture
def scenario_site() -> MockSite:
    """admin is a directory, images a file, login missing."""
    return MockSite(routes={"/images": 200}).directory("/admin")


@pytest.fixture
def make_site() -> type[MockSite]:
    """Factory for custom mock targets."""
    return MockSite
