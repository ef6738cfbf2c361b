#!/usr/bin/env python3
"""Run the Label Crop API on the Flask development server."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Mapping, Sequence

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5001


def _port(value: object, source: str) -> int:
    try:
        port = int(str(value))
    except ValueError as exc:
        raise SystemExit(f"Invalid port {value!r} from {source}.") from exc
    if not 0 < port < 65536:
        raise SystemExit(f"Port {port} from {source} is out of range.")
    return port


def resolve_bind(
    args: argparse.Namespace,
    site: Mapping[str, object],
    environ: Mapping[str, str] = os.environ,
) -> tuple[str, int]:
    """Pick host and port: command line, then environment, then ``config.yml``."""

    host = args.host or environ.get("LABEL_CROP_HOST") or site.get("host") or DEFAULT_HOST
    if args.port is not None:
        return str(host), _port(args.port, "--port")
    for name in ("LABEL_CROP_PORT", "PORT"):
        if environ.get(name):
            return str(host), _port(environ[name], name)
    if site.get("port") is not None:
        return str(host), _port(site["port"], "config.yml")
    return str(host), DEFAULT_PORT


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--host", help="Interface to bind (default 127.0.0.1).")
    parser.add_argument("--port", help="Port to listen on (default 5001).")
    parser.add_argument(
        "--config",
        default=None,
        help="Config class from app.config, e.g. TestingConfig.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable the Flask debugger.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    from app import create_app

    app = create_app(args.config)
    host, port = resolve_bind(args, app.config.get("SITE_SETTINGS", {}))
    app.run(host=host, port=port, debug=args.debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
