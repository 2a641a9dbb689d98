"""
HTTP listener for a greeter router.

Serves a router over HTTP/1.1 with one thread per connection. ``start``
binds and returns a handle; ``stop`` (or ``handle.stop()``) stops accepting,
lets in-flight requests finish and releases the port.
"""

import threading
import urllib.parse
from http.server import BaseHTTPRequestHandler, HTTPServer
from socketserver import ThreadingMixIn
from typing import Optional

from .config import Config
from .models import Request, Response

DEFAULT_HOST = "0.0.0.0"
PRINT_PREFIX = "[greeter]"
POLL_INTERVAL = 0.1
REQUEST_TIMEOUT = 5.0

INTERNAL_ERROR = Response(500, "Internal Server Error")


class GreeterHandler(BaseHTTPRequestHandler):
    """Hands every request to ``server.app.dispatch``."""

    protocol_version = "HTTP/1.1"
    server_version = "greeter"
    timeout = REQUEST_TIMEOUT

    def log_message(self, format, *args):
        if self.server.debug:
            print(f"{PRINT_PREFIX} {self.address_string()} {format % args}", flush=True)

    def do_GET(self):
        self._dispatch()

    do_HEAD = do_GET
    do_POST = do_GET
    do_PUT = do_GET
    do_PATCH = do_GET
    do_DELETE = do_GET
    do_OPTIONS = do_GET

    def _dispatch(self):
        parsed = urllib.parse.urlsplit(self.path)

        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            self.send_error(400, "Bad Content-Length")
            return
        body = self.rfile.read(length) if length > 0 else b""

        request = Request(
            method=self.command,
            path=parsed.path,
            headers=dict(self.headers.items()),
            body=body,
            query=parsed.query,
        )

        try:
            response = self.server.app.dispatch(request)
        except Exception as e:
            print(f"{PRINT_PREFIX} Error handling {self.command} {parsed.path}: {e}", flush=True)
            response = INTERNAL_ERROR

        self._send(response)

    def _send(self, response: Response):
        body = response.encoded_body()

        self.send_response(response.status_code)
        self.send_header("Content-Type", response.content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Connection", "close")
        self.end_headers()

        if self.command != "HEAD":
            self.wfile.write(body)


class ThreadedHTTPServer(ThreadingMixIn, HTTPServer):
    # Non-daemon handler threads are joined by server_close(), which is what
    # lets stop() drain in-flight requests.
    daemon_threads = False
    block_on_close = True

    def __init__(self, server_address, app, debug: bool = False):
        self.app = app
        self.debug = debug
        super().__init__(server_address, GreeterHandler)


class ListenerHandle:
    """A bound, serving listener."""

    def __init__(self, server: ThreadedHTTPServer, thread: threading.Thread):
        self._server = server
        self._thread = thread
        self._lock = threading.Lock()
        self._stopped = False

    @property
    def host(self) -> str:
        return self._server.server_address[0]

    @property
    def port(self) -> int:
        return self._server.server_port

    @property
    def url(self) -> str:
        host = self.host
        if host in ("", "0.0.0.0"):
            host = "127.0.0.1"
        return f"http://{host}:{self.port}"

    @property
    def running(self) -> bool:
        return not self._stopped and self._thread.is_alive()

    def stop(self) -> None:
        """Stop accepting, wait for in-flight requests and release the port.

        Only the first call does anything.
        """
        with self._lock:
            if self._stopped:
                return
            self._stopped = True

        self._server.shutdown()
        self._server.server_close()
        self._thread.join()
        print(f"{PRINT_PREFIX} Stopped listening on port {self.port}", flush=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def __repr__(self):
        state = "running" if self.running else "stopped"
        return f"<ListenerHandle {self.host}:{self.port} {state}>"


def start(app, config: Optional[Config] = None, host: str = DEFAULT_HOST, debug: bool = False) -> ListenerHandle:
    """
    Bind ``config.port`` on ``host`` and serve ``app`` on a background thread.

    Port 0 asks the OS for a free port; read it back from ``handle.port``.

    Binding runs ``socket.getfqdn(host)`` (via ``HTTPServer.server_bind``),
    so a wildcard or named host can stall on a slow resolver. Pass
    ``127.0.0.1`` where that matters.

    Raises:
        OSError: If the address cannot be bound.
    """
    if config is None:
        config = Config()

    server = ThreadedHTTPServer((host, config.port), app, debug=debug)
    thread = threading.Thread(
        target=server.serve_forever,
        kwargs={"poll_interval": POLL_INTERVAL},
        name=f"greeter-listener-{server.server_port}",
        daemon=True,
    )
    thread.start()

    print(f"{PRINT_PREFIX} Listening on {host}:{server.server_port}", flush=True)
    return ListenerHandle(server, thread)


def stop(handle: ListenerHandle) -> None:
    handle.stop()
