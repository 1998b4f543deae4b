"""Pytest fixtures for task runner tests."""

from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
import io
import socket
import threading

import pytest
from rich.console import Console


def make_console() -> Console:
    """Console writing plain text into a string buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)


@pytest.fixture
def out():
    return make_console()


@pytest.fixture
def err():
    return make_console()


class _Handler(BaseHTTPRequestHandler):
    status = 200
    body = b'OK'

    def do_GET(self):
        self.send_response(self.status)
        self.send_header('X-First', '1')
        self.send_header('X-Second', '2')
        self.send_header('Content-Length', str(len(self.body)))
        self.end_headers()
        self.wfile.write(self.body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def http_server():
    """
    Start a throwaway HTTP server on an ephemeral port.

    Yields a function (status, body) -> port that configures the response.
    """
    handler = type('Handler', (_Handler,), {})
    server = ThreadingHTTPServer(('127.0.0.1', 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    def configure(status: int = 200, body: bytes = b'OK') -> int:
        handler.status = status
        handler.body = body
        return server.server_address[1]

    yield configure

    server.shutdown()
    server.server_close()


@pytest.fixture
def closed_port():
    """A port nothing is listening on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def silent_port():
    """A port that accepts connections but never answers."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    sock.listen(8)
    yield sock.getsockname()[1]
    sock.close()
