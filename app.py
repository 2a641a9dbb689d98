#!/usr/bin/env python3
"""
Greeter server entry point.

Usage:
    python app.py
    python app.py --port 8080
    PORT=8080 python app.py

Environment Variables:
    PORT - Port to listen on (default: 3000)
"""

import argparse
import sys
import threading

from greeter import Config, ConfigError, create_app, start
from greeter.listener import DEFAULT_HOST, PRINT_PREFIX


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Greeter HTTP server")
    parser.add_argument("--host", "-H", type=str, default=DEFAULT_HOST, help="host to listen on")
    parser.add_argument("--port", "-p", type=int, default=None, help="port to listen on (overrides PORT)")
    parser.add_argument("--debug", "-D", action="store_true", help="log every request")
    args = parser.parse_args(argv)

    try:
        if args.port is not None:
            config = Config(port=args.port)
        else:
            config = Config.from_env()
    except ConfigError as e:
        parser.error(str(e))

    try:
        handle = start(create_app(), config, host=args.host, debug=args.debug)
    except OSError as e:
        print(f"{PRINT_PREFIX} Error: {e}", flush=True)
        return 1
    print(f"{PRINT_PREFIX} Server is running on port {handle.port}", flush=True)

    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        print(f"\n{PRINT_PREFIX} Shutting down...", flush=True)
    finally:
        handle.stop()


if __name__ == '__main__':
    sys.exit(main())
