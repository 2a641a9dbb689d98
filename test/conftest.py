"""Shared fixtures: the application object and a live listener on an ephemeral port."""

import pytest

from greeter import Config, create_app, start
from greeter.client import GreeterClient

HOST = "127.0.0.1"


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def listener(app):
    """Serve the app on an OS-assigned port for the duration of one test."""
    handle = start(app, Config(port=0), host=HOST)
    yield handle
    handle.stop()


@pytest.fixture
def client(listener):
    return GreeterClient(listener.url)
