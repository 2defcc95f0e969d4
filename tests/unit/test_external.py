"""
Tests for the real collaborators: LocalFileSystem on a temp directory and
UrlFetcher against loopback servers.
"""

import socket
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer as StubServer

import pytest

from funhttp.external import LocalFileSystem, UrlFetcher
from funhttp.http import FetchError


class StubHandler(BaseHTTPRequestHandler):
    """Answers every GET with the status/type/body set on the server."""

    def do_GET(self):
        self.server.paths.append(self.path)
        self.send_response(self.server.reply_status)
        self.send_header("Content-Type", self.server.reply_type)
        self.send_header("Content-Length", str(len(self.server.reply_body)))
        self.end_headers()
        self.wfile.write(self.server.reply_body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def stub():
    """A stdlib HTTP server on a loopback port, replying 200 "ok" by default."""
    server = StubServer(("127.0.0.1", 0), StubHandler)
    server.paths = []
    server.reply_status = 200
    server.reply_type = "text/plain; charset=utf-8"
    server.reply_body = b"ok"

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield server

    server.shutdown()
    server.server_close()
    thread.join(timeout=5.0)


def stub_url(server, path: str) -> str:
    return f"http://127.0.0.1:{server.server_address[1]}{path}"


class TestUrlFetcher:
    """Tests for UrlFetcher.fetch()."""

    def test_fetch_body(self, stub):
        """Test a plain 200 response."""
        assert UrlFetcher(timeout=5.0).fetch(stub_url(stub, "/users/x/repos")) == "ok"
        assert stub.paths == ["/users/x/repos"]

    def test_declared_charset(self, stub):
        """The body is decoded with the charset from Content-Type."""
        stub.reply_type = "text/plain; charset=iso-8859-1"
        stub.reply_body = "café".encode("iso-8859-1")

        assert UrlFetcher(timeout=5.0).fetch(stub_url(stub, "/")) == "café"

    def test_http_error_status(self, stub):
        """A non-2xx status is a FetchError that hides the query string."""
        stub.reply_status = 404
        url = stub_url(stub, "/weather?q=x&appid=SECRET")

        with pytest.raises(FetchError) as exc_info:
            UrlFetcher(timeout=5.0).fetch(url)

        message = str(exc_info.value)
        assert "HTTP 404" in message
        assert "SECRET" not in message
        assert "appid" not in message

    def test_connection_refused(self, free_port):
        """Nothing listening on the port → 'Cannot reach'."""
        url = f"http://127.0.0.1:{free_port}/x?appid=SECRET"

        with pytest.raises(FetchError) as exc_info:
            UrlFetcher(timeout=5.0).fetch(url)

        assert "Cannot reach" in str(exc_info.value)
        assert "SECRET" not in str(exc_info.value)

    def test_not_a_url(self):
        """A string urllib can't parse → 'Invalid URL'."""
        with pytest.raises(FetchError) as exc_info:
            UrlFetcher(timeout=5.0).fetch("notaurl")

        assert "Invalid URL" in str(exc_info.value)

    def test_space_in_url(self, stub):
        """Characters http.client refuses to send are a FetchError too."""
        with pytest.raises(FetchError):
            UrlFetcher(timeout=5.0).fetch(stub_url(stub, "/weather?q=New York"))

    def test_silent_server_times_out(self):
        """A server that accepts but never answers is bounded by timeout."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
            listener.bind(("127.0.0.1", 0))
            listener.listen(1)
            url = f"http://127.0.0.1:{listener.getsockname()[1]}/"

            with pytest.raises(FetchError):
                UrlFetcher(timeout=0.5).fetch(url)


class TestLocalFileSystem:
    """Tests for LocalFileSystem."""

    def test_read_text(self, doc_root):
        """Test reading a page from the root directory."""
        assert "${links}" in LocalFileSystem(doc_root).read_text("root.html")

    def test_read_missing(self, doc_root):
        """Missing files raise OSError for the handler to report."""
        with pytest.raises(OSError):
            LocalFileSystem(doc_root).read_text("missing.html")

    def test_exists(self, doc_root):
        """Test existing and missing names."""
        files = LocalFileSystem(doc_root)

        assert files.exists("index.html")
        assert not files.exists("missing.html")

    @pytest.mark.parametrize("name", ["", "a" * 300, "bad\x00name"])
    def test_unusable_names_are_missing(self, doc_root, name: str):
        """Empty, too-long and NUL-containing names never exist."""
        assert LocalFileSystem(doc_root).exists(name) is False
