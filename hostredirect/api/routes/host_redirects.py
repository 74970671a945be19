"""
Host Redirect Handler.

Answers every request with the resolver's decision.

Key behaviors:
- Installed as the router's default, so it sees every request target
  (origin-form, absolute-form, ``*``) and every method
- Reads Host and the request target as raw bytes from the ASGI scope
- Returns plain-text bodies; Location only on 308
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from starlette.types import Receive, Scope, Send

from hostredirect.api.deps import get_resolver
from hostredirect.components.redirects import (
    RedirectDecision,
    build_request_target,
)

# --- Helper Functions ---


def get_host_header(request: Request) -> bytes | None:
    """First Host header as raw bytes, or None when absent."""
    for name, value in request.headers.raw:
        if name.lower() == b"host":
            return value
    return None


def get_request_target(request: Request) -> bytes:
    """
    Raw path plus query string, exactly as the client sent them.

    Falls back to the decoded path when the server doesn't supply raw_path.
    An empty query after a bare ``?`` is not reported by ASGI servers, so
    ``/foo?`` comes back as ``/foo``.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        raw_path = request.scope["path"].encode("utf-8")
    # Some servers leave the query attached to raw_path
    raw_path = raw_path.partition(b"?")[0]
    return build_request_target(raw_path, request.scope.get("query_string", b""))


def decision_to_response(decision: RedirectDecision) -> Response:
    """Render a RedirectDecision as a plain-text response."""
    headers: dict[str, str] = {}
    if decision.location is not None:
        # latin-1 round-trips the already validated bytes unchanged
        headers["location"] = decision.location.decode("latin-1")

    return PlainTextResponse(
        content=decision.body,
        status_code=decision.status_code,
        headers=headers,
    )


def redirect_request(request: Request) -> Response:
    """Resolve one request and render the decision."""
    resolver = get_resolver(request)
    decision = resolver.resolve(get_host_header(request), get_request_target(request))
    return decision_to_response(decision)


# --- ASGI Handler ---


async def handle_redirect(scope: Scope, receive: Receive, send: Send) -> None:
    """
    Router default handler.

    No routes are registered, so every HTTP request lands here regardless
    of its target or method. WebSocket upgrades are closed.
    """
    if scope["type"] == "websocket":
        await send({"type": "websocket.close", "code": 1000})
        return

    response = redirect_request(Request(scope, receive))
    await response(scope, receive, send)
