"""Health check endpoints for the operator."""

from __future__ import annotations

import threading
from typing import Any

from werkzeug.serving import BaseWSGIServer, make_server
from werkzeug.wrappers import Request, Response


def create_health_wsgi_app() -> Any:
    """Return the WSGI application serving the probe endpoints."""
    return health_check_app


def health_check_app(environ: dict[str, Any], start_response: Any) -> list[bytes]:
    """WSGI application serving /healthz and /readyz."""
    request = Request(environ)
    path = request.path

    if path == "/healthz":
        response = Response('{"status":"ok"}', mimetype="application/json", status=200)
    elif path == "/readyz":
        response = Response('{"status":"ready"}', mimetype="application/json", status=200)
    else:
        response = Response('{"error":"not found"}', mimetype="application/json", status=404)

    return response(environ, start_response)


def start_health_server(port: int, host: str = "") -> BaseWSGIServer:
    """Serve the health endpoints from a daemon thread.

    Args:
        port: Port to listen on
        host: Interface to bind, all interfaces by default

    Returns:
        The running server, so callers can shut it down
    """
    server = make_server(host, port, create_health_wsgi_app(), threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server
