"""Routing table: exact (method, path) bindings with a 404 fallback."""

from typing import List, Tuple

from .models import Request, Response, Responder, Route

NOT_FOUND = Response(404, "Not Found")


class Router:
    """Ordered list of routes.

    Dispatch is a pure function of the request: the first route registered
    for the exact method and path wins, anything else gets ``NOT_FOUND``.
    """

    def __init__(self) -> None:
        self._routes: List[Route] = []

    @property
    def routes(self) -> Tuple[Route, ...]:
        return tuple(self._routes)

    def register(self, method: str, path: str, responder: Responder) -> Route:
        route = Route(method=method, path=path, responder=responder)
        self._routes.append(route)
        return route

    def get(self, path: str, responder: Responder) -> Route:
        return self.register("GET", path, responder)

    def dispatch(self, request: Request) -> Response:
        for route in self._routes:
            if route.matches(request):
                return route.responder(request)
        return NOT_FOUND
