"""
Tests for the ``app.py`` entry point, run as a real process.

Each test starts ``python app.py`` on 127.0.0.1 and reads its prefixed
stdout lines.
"""

import os
import signal
import socket
import subprocess
import sys
from pathlib import Path

import pytest
import requests

APP_SCRIPT = Path(__file__).resolve().parent.parent / "app.py"
HOST = "127.0.0.1"
READY_LINE = "[greeter] Server is running on port"

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="relies on SIGINT delivery")


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((HOST, 0))
        return s.getsockname()[1]


def _app_command(*args, env=None):
    environ = dict(os.environ)
    environ.pop("PORT", None)
    environ.update(env or {})
    return [sys.executable, str(APP_SCRIPT), "--host", HOST, *args], environ


def _wait_for_ready(process) -> str:
    """Read stdout until the ready line; return everything read so far."""
    seen = []
    for line in process.stdout:
        seen.append(line)
        if line.startswith(READY_LINE):
            break
    return "".join(seen)


def test_port_from_environment_serves_greetings():
    port = _free_port()
    command, environ = _app_command(env={"PORT": str(port)})
    process = subprocess.Popen(command, env=environ, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)

    try:
        output = _wait_for_ready(process)
        assert f"{READY_LINE} {port}" in output

        response = requests.get(f"http://{HOST}:{port}/", timeout=5)
        assert response.status_code == 200
        assert response.text == "Hello world"
        print(f"[test] ✓ Entry point served: {response.text}")
    finally:
        process.send_signal(signal.SIGINT)
        rest, _ = process.communicate(timeout=15)

    assert process.returncode == 0
    assert "[greeter] Shutting down..." in rest
    assert f"[greeter] Stopped listening on port {port}" in rest


def test_port_flag_overrides_environment():
    port = _free_port()
    command, environ = _app_command("--port", str(port), env={"PORT": "not-a-port"})
    process = subprocess.Popen(command, env=environ, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)

    try:
        output = _wait_for_ready(process)
        assert f"{READY_LINE} {port}" in output
        assert requests.get(f"http://{HOST}:{port}/evening", timeout=5).text == "Good evening"
    finally:
        process.send_signal(signal.SIGINT)
        process.communicate(timeout=15)

    assert process.returncode == 0


@pytest.mark.parametrize("args, env", [
    (("--port", "70000"), {}),
    ((), {"PORT": "70000"}),
    ((), {"PORT": "abc"}),
])
def test_bad_port_is_a_usage_error(args, env):
    command, environ = _app_command(*args, env=env)
    result = subprocess.run(command, env=environ, capture_output=True, text=True, timeout=30)

    assert result.returncode == 2
    assert "error:" in result.stderr
    assert "Traceback" not in result.stderr


def test_port_in_use_reports_error():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as blocker:
        blocker.bind((HOST, 0))
        blocker.listen(1)
        port = blocker.getsockname()[1]

        command, environ = _app_command(env={"PORT": str(port)})
        result = subprocess.run(command, env=environ, capture_output=True, text=True, timeout=30)

    assert result.returncode == 1
    assert "[greeter] Error:" in result.stdout
    assert "Traceback" not in result.stderr
