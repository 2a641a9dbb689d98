"""Request, response and route records shared by the router and listener."""

from dataclasses import dataclass, field
from typing import Callable, Dict

TEXT_PLAIN = "text/plain; charset=utf-8"


@dataclass(frozen=True)
class Request:
    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    query: str = ""


@dataclass(frozen=True)
class Response:
    status_code: int
    body: str = ""
    content_type: str = TEXT_PLAIN

    def encoded_body(self) -> bytes:
        return self.body.encode("utf-8")


Responder = Callable[[Request], Response]


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    responder: Responder

    def matches(self, request: Request) -> bool:
        # Exact and case-sensitive; the query string never takes part.
        return self.method == request.method and self.path == request.path
