import asyncio
from collections.abc import Callable
from typing import Any
from urllib.parse import unquote

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hostredirect.api.main import create_app
from hostredirect.components.redirects import ConfigureInput, ResolverConfig, run_configure


@pytest.fixture
def make_config() -> Callable[..., ResolverConfig]:
    """Factory building a validated ResolverConfig from pair strings."""

    def _make(*pairs: str, fallback: str | None = None, insecure: bool = False) -> ResolverConfig:
        output = run_configure(ConfigureInput(pairs=pairs, fallback=fallback, insecure=insecure))
        assert output.success, output.errors
        assert output.config is not None
        return output.config

    return _make


@pytest.fixture
def config(make_config: Callable[..., ResolverConfig]) -> ResolverConfig:
    return make_config("example.com=www.example.com")


@pytest.fixture
def app(config: ResolverConfig) -> FastAPI:
    return create_app(config)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def _call_asgi(
    app: FastAPI,
    *,
    headers: list[tuple[bytes, bytes]],
    raw_path: bytes = b"/",
    query_string: bytes = b"",
    method: str = "GET",
) -> tuple[int, list[tuple[bytes, bytes]], bytes]:
    """
    Send one request straight through the ASGI interface.

    For requests an HTTP client library refuses to build (no Host header,
    non-UTF-8 host, control characters in the target).
    Returns (status, headers, body).
    """
    scope: dict[str, Any] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.0",
        "method": method,
        "scheme": "http",
        "path": unquote(raw_path.partition(b"?")[0].decode("latin-1")),
        "raw_path": raw_path,
        "query_string": query_string,
        "root_path": "",
        "headers": headers,
        "client": ("127.0.0.1", 50000),
        "server": ("127.0.0.1", 3000),
    }
    messages: list[dict[str, Any]] = []

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    asyncio.run(app(scope, receive, send))

    start = next(m for m in messages if m["type"] == "http.response.start")
    body = b"".join(m.get("body", b"") for m in messages if m["type"] == "http.response.body")
    return start["status"], list(start["headers"]), body


@pytest.fixture
def call_asgi() -> Callable[..., tuple[int, list[tuple[bytes, bytes]], bytes]]:
    return _call_asgi
