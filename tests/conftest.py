from __future__ import annotations

import io
import json
import threading
import zipfile
from http.server import BaseHTTPRequestHandler, HTTPServer
from socketserver import ThreadingMixIn
from typing import Iterator

import pytest


class _ThreadedServer(ThreadingMixIn, HTTPServer):
    daemon_threads = True
    allow_reuse_address = True


class _RouteHandler(BaseHTTPRequestHandler):
    server_version = "MockGoDl/1.0"
    protocol_version = "HTTP/1.1"

    def do_GET(self) -> None:
        self.server.requested.append(self.path)
        route = self.server.routes.get(self.path)
        if route is None:
            self.send_error(404)
            return
        status, body = route
        self.send_response(status)
        self.send_header("Content-Type", "application/octet-stream")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: object) -> None:
        return


class GoDownloadServer:
    def __init__(self, server: _ThreadedServer) -> None:
        self._server = server
        self.base_url = f"http://127.0.0.1:{server.server_port}"

    @property
    def requested(self) -> list[str]:
        return self._server.requested

    def add(self, path: str, body: bytes, status: int = 200) -> str:
        self._server.routes[path] = (status, body)
        return f"{self.base_url}{path}"

    def add_json(self, path: str, payload: object, status: int = 200) -> str:
        return self.add(path, json.dumps(payload).encode("utf-8"), status)


@pytest.fixture
def go_dl_server() -> Iterator[GoDownloadServer]:
    server = _ThreadedServer(("127.0.0.1", 0), _RouteHandler)
    server.routes = {}
    server.requested = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield GoDownloadServer(server)
    finally:
        server.shutdown()
        server.server_close()


def build_zip(files: dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in files.items():
            archive.writestr(name, data)
    return buffer.getvalue()


def release_payload(version: str, files: list[dict[str, object]], *, stable: bool = True) -> dict[str, object]:
    return {
        "version": version,
        "stable": stable,
        "files": [{"version": version, **item} for item in files],
    }
