"""
Greeter HTTP Client
Small requests-based client for a running greeter server.
"""

import time
from typing import Tuple

import requests

PRINT_PREFIX = "[greeter-client]"


class GreeterClient:
    """Client for the greeter endpoints."""

    def __init__(self, base_url: str, timeout: float = 5):
        """
        Initialize the client.

        Args:
            base_url: Server root, e.g. ``http://127.0.0.1:3000``
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def get(self, path: str) -> Tuple[int, str]:
        """
        Send a GET request and collect the full response.

        Args:
            path: URL path, e.g. "/" or "/evening"

        Returns:
            ``(status_code, body)``

        Raises:
            requests.exceptions.ConnectionError: If nothing is listening
        """
        response = requests.get(f"{self.base_url}{path}", timeout=self.timeout)
        return response.status_code, response.text

    def hello(self) -> str:
        return self._expect_ok("/")

    def evening(self) -> str:
        return self._expect_ok("/evening")

    def wait_until_ready(self, attempts: int = 10, delay: float = 0.2) -> bool:
        """
        Poll ``/`` until the server answers 200.

        Returns:
            True once the server is ready, False if it never answered
        """
        for _ in range(attempts):
            try:
                status, _ = self.get("/")
                if status == 200:
                    print(f"{PRINT_PREFIX} Server ready at {self.base_url}", flush=True)
                    return True
            except requests.exceptions.RequestException:
                pass
            time.sleep(delay)

        print(f"{PRINT_PREFIX} Server at {self.base_url} did not become ready", flush=True)
        return False

    def _expect_ok(self, path: str) -> str:
        status, body = self.get(path)
        if status != 200:
            raise RuntimeError(f"GET {path} returned HTTP {status}")
        return body
