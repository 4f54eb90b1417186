import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qsl, urlsplit

import httpx
import pytest

from restwrap import RestClient


def _compact(payload) -> bytes:
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


class EchoHandler(BaseHTTPRequestHandler):
    """Echo endpoints used by the end-to-end tests.

    /echo       query and headers back as JSON
    /body       request body back verbatim
    /headers    repeated Set-Cookie headers
    /latin1     latin-1 body declared as such
    /truncated  Content-Length larger than the body sent
    /redirect   302 to /echo
    """

    def log_message(self, format, *args):
        pass

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length else b""

    def _reply(self, status: int, body: bytes, headers=()) -> None:
        self.send_response(status)
        for name, value in headers:
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _handle(self) -> None:
        parts = urlsplit(self.path)
        body = self._read_body()

        if parts.path == "/echo":
            payload = {
                "method": self.command,
                "query": dict(parse_qsl(parts.query)),
                "headers": dict(self.headers.items()),
            }
            self._reply(200, _compact(payload), [("Content-Type", "application/json")])
        elif parts.path == "/body":
            self._reply(200, body, [("Content-Type", "application/octet-stream")])
        elif parts.path == "/headers":
            self._reply(
                200,
                b"ok",
                [("Set-Cookie", "a=1"), ("X-Trace", "t"), ("Set-Cookie", "b=2")],
            )
        elif parts.path == "/latin1":
            self._reply(
                200,
                "café".encode("latin-1"),
                [("Content-Type", "text/plain; charset=latin-1")],
            )
        elif parts.path == "/truncated":
            self.send_response(200)
            self.send_header("Content-Length", "100")
            self.end_headers()
            self.wfile.write(b"short")
            self.wfile.flush()
        elif parts.path == "/redirect":
            self._reply(302, b"", [("Location", "/echo?redirected=yes")])
        else:
            self._reply(404, b"not found")

    do_GET = _handle
    do_POST = _handle
    do_PUT = _handle
    do_PATCH = _handle
    do_DELETE = _handle


class KeepAliveEchoHandler(EchoHandler):
    protocol_version = "HTTP/1.1"


def _serve(handler_class):
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler_class)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()


@pytest.fixture(scope="session")
def echo_server():
    """Base URL of a threaded local echo server."""
    yield from _serve(EchoHandler)


@pytest.fixture(scope="session")
def keepalive_server():
    """Like echo_server, but connections stay open between requests."""
    yield from _serve(KeepAliveEchoHandler)


@pytest.fixture
def refused_url():
    """A URL on a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/"


def echo_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/echo":
        headers = {
            key.decode("latin-1"): value.decode("latin-1")
            for key, value in request.headers.raw
        }
        return httpx.Response(
            200,
            content=_compact({"query": dict(request.url.params), "headers": headers}),
            headers={"Content-Type": "application/json"},
        )
    return httpx.Response(200, content=request.content)


@pytest.fixture
def calls():
    return []


@pytest.fixture
def mock_transport(calls):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return echo_handler(request)

    return httpx.MockTransport(handler)


@pytest.fixture
def client(mock_transport):
    """A RestClient whose transports are in-process echo handlers."""
    http_client = httpx.Client(transport=mock_transport)
    with RestClient(
        http_client=http_client,
        async_http_client=httpx.AsyncClient(transport=mock_transport),
        user_agent="restwrap-tests/1.0",
    ) as rest_client:
        yield rest_client
    http_client.close()


@pytest.fixture
def anyio_backend():
    return "asyncio"
