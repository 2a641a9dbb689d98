"""The greeter application: two plain-text GET endpoints.

``create_app`` only builds the routing table. Nothing here touches the
network; call ``greeter.listener.start`` to serve it.
"""

from .models import Request, Response
from .router import Router

HELLO = Response(200, "Hello world")
EVENING = Response(200, "Good evening")


def index(request: Request) -> Response:
    return HELLO


def evening(request: Request) -> Response:
    return EVENING


def create_app() -> Router:
    app = Router()
    app.get("/", index)
    app.get("/evening", evening)
    return app
