from .app import create_app
from .config import DEFAULT_PORT, Config, ConfigError
from .listener import ListenerHandle, start, stop
from .models import Request, Response, Route
from .router import NOT_FOUND, Router

__all__ = [
    "DEFAULT_PORT",
    "NOT_FOUND",
    "Config",
    "ConfigError",
    "ListenerHandle",
    "Request",
    "Response",
    "Route",
    "Router",
    "create_app",
    "start",
    "stop",
]
