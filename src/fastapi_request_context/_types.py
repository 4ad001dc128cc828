"""Shared type aliases."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TYPE_CHECKING

from starlette.requests import Request
from starlette.responses import Response

if TYPE_CHECKING:
    from fastapi_request_context.context import RequestContext

# Handler written against a RequestContext, and the endpoint it is adapted into
ContextHandler = Callable[["RequestContext"], Awaitable[None]]
Endpoint = Callable[[Request], Awaitable[Response]]
ContextProvider = Callable[[Request], AsyncIterator["RequestContext"]]
