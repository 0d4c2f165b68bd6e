from __future__ import annotations

import gzip
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest
import requests
from amend.core.downloader import Downloader
from amend.utils import HTTPUtils


class FakeResponse:
    def __init__(self, chunks: list[bytes], content_length: int | None = None, fail_after: int | None = None):
        self.chunks = chunks
        self.fail_after = fail_after
        self.headers = {} if content_length is None else {"Content-Length": str(content_length)}

    def __enter__(self):
        return self

    def __exit__(self, *_exc):
        return False

    def iter_content(self, chunk_size: int = 65536):
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index >= self.fail_after:
                raise requests.ConnectionError("connection reset by peer")
            yield chunk


@pytest.fixture
def jar(tmp_path):
    path = tmp_path / "server.jar"
    path.write_bytes(b"old-build-contents")
    return path


def _serve(monkeypatch, response) -> None:
    monkeypatch.setattr(HTTPUtils, "get_content", lambda *_args, **_kwargs: response)


@pytest.mark.smoke
def test_fetch_and_replace_overwrites_destination(monkeypatch, jar) -> None:
    _serve(monkeypatch, FakeResponse([b"new-", b"build"], content_length=9))

    assert Downloader().fetch_and_replace("https://example.invalid/jar", jar) is True
    assert jar.read_bytes() == b"new-build"
    assert [p.name for p in jar.parent.iterdir()] == ["server.jar"]


@pytest.mark.smoke
def test_interrupted_stream_leaves_destination_untouched(monkeypatch, jar) -> None:
    before = jar.read_bytes()
    _serve(monkeypatch, FakeResponse([b"partial", b"never"], fail_after=1))

    assert Downloader().fetch_and_replace("https://example.invalid/jar", jar) is False
    assert jar.read_bytes() == before
    assert [p.name for p in jar.parent.iterdir()] == ["server.jar"]


@pytest.mark.smoke
def test_truncated_transfer_is_rejected(monkeypatch, jar) -> None:
    before = jar.read_bytes()
    _serve(monkeypatch, FakeResponse([b"only-half"], content_length=1024))

    assert Downloader().fetch_and_replace("https://example.invalid/jar", jar) is False
    assert jar.read_bytes() == before


@pytest.mark.smoke
def test_empty_body_is_rejected(monkeypatch, jar) -> None:
    before = jar.read_bytes()
    _serve(monkeypatch, FakeResponse([]))

    assert Downloader().fetch_and_replace("https://example.invalid/jar", jar) is False
    assert jar.read_bytes() == before


@pytest.mark.smoke
def test_unreachable_download_keeps_destination(monkeypatch, jar) -> None:
    before = jar.read_bytes()
    _serve(monkeypatch, None)

    assert Downloader().fetch_and_replace("https://example.invalid/jar", jar) is False
    assert jar.read_bytes() == before
    assert [p.name for p in jar.parent.iterdir()] == ["server.jar"]


@pytest.mark.smoke
def test_missing_destination_is_created(monkeypatch, tmp_path) -> None:
    _serve(monkeypatch, FakeResponse([b"fresh"]))
    target = tmp_path / "purpur.jar"

    assert Downloader().fetch_and_replace("https://example.invalid/jar", target) is True
    assert target.read_bytes() == b"fresh"


@pytest.fixture
def gzip_server():
    payload = b"PK" + b"A" * 200000
    body = gzip.compress(payload)

    class _Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            self.send_response(200)
            self.send_header("Content-Type", "application/java-archive")
            self.send_header("Content-Encoding", "gzip")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *_args):
            pass

    server = HTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_port}/paper.jar", payload
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.mark.smoke
def test_gzip_encoded_download_is_accepted(gzip_server, jar) -> None:
    url, payload = gzip_server

    assert Downloader().fetch_and_replace(url, jar) is True
    assert jar.read_bytes() == payload
    assert [p.name for p in jar.parent.iterdir()] == ["server.jar"]
