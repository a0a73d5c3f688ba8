#!/usr/bin/env python3
"""Serve the generated site locally, mapping /posts/slug to /posts/slug.html."""

from __future__ import annotations

import argparse
import functools
import http.server
import socketserver
import sys
from pathlib import Path
from typing import Optional, Sequence

from .generate_site import OUTPUT_DIR

DEFAULT_PORT = 8000


def resolve_pretty_path(request_path: str, root: Path) -> str:
    """Return ``request_path`` with ``.html`` appended when that page exists."""
    path, _, query = request_path.partition("?")
    if path.endswith("/") or Path(path).suffix:
        return request_path
    candidate = root / (path.lstrip("/") + ".html")
    if candidate.is_file():
        path += ".html"
        return f"{path}?{query}" if query else path
    return request_path


class SiteHandler(http.server.SimpleHTTPRequestHandler):
    def do_GET(self):
        self.path = resolve_pretty_path(self.path, Path(self.directory))
        return http.server.SimpleHTTPRequestHandler.do_GET(self)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("port", nargs="?", type=int, default=DEFAULT_PORT)
    parser.add_argument("--directory", default=str(OUTPUT_DIR), help="Generated site to serve")
    args = parser.parse_args(argv)

    root = Path(args.directory)
    if not root.is_dir():
        print(f"Nothing to serve: {root} does not exist (run mksite first)", file=sys.stderr)
        return 1

    handler = functools.partial(SiteHandler, directory=str(root))
    httpd = socketserver.TCPServer(("", args.port), handler)

    print(f"Serving {root} at http://localhost:{args.port}")
    sys.stdout.flush()

    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        httpd.server_close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
