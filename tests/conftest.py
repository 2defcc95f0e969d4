"""
pytest configuration and fixtures.
"""

import random
import socket
import threading
from typing import Dict, Generator, List, Optional
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from funhttp import HTTPServer, ServerConfig
from funhttp.app import build_router
from funhttp.http import FetchError


ROOT_TEMPLATE = "<html><body><h1>Home</h1>${links}</body></html>"
INDEX_PAGE = "<html><body><img id='image'></body></html>"


class FakeFileSystem:
    """In-memory FileSystem: name → contents."""

    def __init__(self, files: Optional[Dict[str, str]] = None):
        self.files = dict(files or {})

    def read_text(self, name: str) -> str:
        if name not in self.files:
            raise FileNotFoundError(name)
        return self.files[name]

    def exists(self, name: str) -> bool:
        return name in self.files


class FakeFetcher:
    """Fetcher that returns a canned body (or raises) and records URLs."""

    def __init__(self, body: str = "", error: Optional[Exception] = None):
        self.body = body
        self.error = error
        self.urls: List[str] = []

    def fetch(self, url: str) -> str:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.body


def send_raw(port: int, data: bytes, timeout: float = 5.0) -> bytes:
    """Send raw bytes to the server and read the reply until EOF."""
    with socket.create_connection(("127.0.0.1", port), timeout=timeout) as s:
        s.sendall(data)
        chunks = []
        while True:
            chunk = s.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


def get(port: int, target: str) -> bytes:
    """Issue a GET for `target` the way a browser would."""
    return send_raw(
        port,
        f"GET {target} HTTP/1.1\r\nHost: localhost\r\nUser-Agent: pytest\r\n\r\n".encode(),
    )


@pytest.fixture
def config() -> ServerConfig:
    """Default test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        timeout=5.0,
        log_level="WARNING",
    )


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


@pytest.fixture
def files() -> FakeFileSystem:
    """File system holding the two pages and one ordinary file."""
    return FakeFileSystem({
        "root.html": ROOT_TEMPLATE,
        "index.html": INDEX_PAGE,
        "notes.txt": "hello",
    })


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(body="[]")


@pytest.fixture
def doc_root(tmp_path: Path) -> Path:
    """Real directory with root.html and index.html for LocalFileSystem."""
    (tmp_path / "root.html").write_text(ROOT_TEMPLATE, encoding="utf-8")
    (tmp_path / "index.html").write_text(INDEX_PAGE, encoding="utf-8")
    return tmp_path


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False

    def __init__(self, server: HTTPServer):
        self.server = server
        self.port: int = 0
        self._thread: Optional[threading.Thread] = None

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(
            target=self.server.run,
            kwargs={"setup_logging": False},
            daemon=True,
        )
        self._thread.start()

        if not self.server.socket_server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

        self.port = self.server.socket_server.address[1]

    def stop(self):
        """Stop the server."""
        self.server.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)


@pytest.fixture
def test_server(
    config: ServerConfig,
    files: FakeFileSystem,
    fetcher: FakeFetcher,
) -> Generator[TestServer, None, None]:
    """A running server wired to the in-memory fakes."""
    router = build_router(config, files=files, fetcher=fetcher, rng=random.Random(0))
    test_srv = TestServer(HTTPServer(config, router=router))
    test_srv.start()

    yield test_srv

    test_srv.stop()


@pytest.fixture
def make_fetcher():
    """Factory for FakeFetcher: make_fetcher(body=..., error=...)."""
    return FakeFetcher


@pytest.fixture
def make_files():
    """Factory for FakeFileSystem: make_files({"name": "contents"})."""
    return FakeFileSystem


@pytest.fixture
def unreachable() -> FetchError:
    """The error a Fetcher raises when the API host can't be reached."""
    return FetchError("Cannot reach https://api.example.invalid/x: Name or service not known")


@pytest.fixture
def http_get():
    """http_get(port, target) → raw response bytes."""
    return get


@pytest.fixture
def http_raw():
    """http_raw(port, data) → raw response bytes."""
    return send_raw


@pytest.fixture
def make_server(config: ServerConfig):
    """Factory: make_server(router) → a started TestServer, stopped at teardown."""
    started: List[TestServer] = []

    def start(router) -> TestServer:
        test_srv = TestServer(HTTPServer(config, router=router))
        test_srv.start()
        started.append(test_srv)
        return test_srv

    yield start

    for test_srv in started:
        test_srv.stop()
