"""Shared pytest fixtures for fastapi-request-context tests."""

from __future__ import annotations

from typing import Any

import pytest
from starlette.requests import Request

from fastapi_request_context.context import RequestContext


@pytest.fixture
def make_request() -> Any:
    """Factory for creating Starlette Request objects with an optional body."""

    def _make(
        method: str = "GET",
        path: str = "/",
        headers: dict[str, str] | None = None,
        query_string: str = "",
        body: bytes = b"",
        disconnected: bool = False,
    ) -> Request:
        scope: dict[str, Any] = {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": query_string.encode(),
            "headers": [
                (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
            ],
            "root_path": "",
        }

        async def receive() -> dict[str, Any]:
            if disconnected:
                return {"type": "http.disconnect"}
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(scope, receive)

    return _make


@pytest.fixture
def make_context(make_request: Any) -> Any:
    """Factory for RequestContext objects around make_request()."""

    def _make(**kwargs: Any) -> RequestContext:
        return RequestContext(request=make_request(**kwargs))

    return _make


@pytest.fixture
def form_headers() -> dict[str, str]:
    return {"Content-Type": "application/x-www-form-urlencoded"}
