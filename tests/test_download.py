import os
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from gsmconsole.download import download_file

PAYLOAD = b"\x00\x01payload bytes\xff" * 1000


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        if self.path == "/file.bin":
            self.send_response(200)
            self.send_header("Content-Length", str(len(PAYLOAD)))
            self.end_headers()
            self.wfile.write(PAYLOAD)
        else:
            self.send_error(404)

    def log_message(self, *args):
        pass


@pytest.fixture
def base_url(monkeypatch):
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


def test_download_writes_body(tmp_path, base_url):
    target = tmp_path / "out.bin"
    download_file(str(target), f"{base_url}/file.bin")
    assert target.read_bytes() == PAYLOAD


def test_download_overwrites_existing_file(tmp_path, base_url):
    target = tmp_path / "out.bin"
    target.write_bytes(b"old content that is longer than nothing")
    download_file(str(target), f"{base_url}/file.bin")
    assert target.read_bytes() == PAYLOAD


def test_bad_status_raises_and_leaves_created_file(tmp_path, base_url):
    target = tmp_path / "missing.bin"
    with pytest.raises(requests.HTTPError, match="bad status: 404"):
        download_file(str(target), f"{base_url}/nothing")
    assert os.path.exists(target)
    assert target.read_bytes() == b""


def test_connection_refused_raises(tmp_path, monkeypatch):
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    with pytest.raises(requests.ConnectionError):
        download_file(str(tmp_path / "x.bin"), f"http://127.0.0.1:{port}/file.bin")


def test_unwritable_target_raises_before_request(tmp_path):
    target = tmp_path / "no_such_dir" / "out.bin"
    with pytest.raises(FileNotFoundError):
        download_file(str(target), "http://127.0.0.1:1/file.bin")