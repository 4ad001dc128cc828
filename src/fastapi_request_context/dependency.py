"""Adapters that plug RequestContext handlers into Starlette and FastAPI apps."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from fastapi_request_context._types import ContextHandler, ContextProvider, Endpoint
from fastapi_request_context.context import RequestContext
from fastapi_request_context.exceptions import ContextException, UnsupportedFormTarget
from fastapi_request_context.options import DEFAULT_OPTIONS, ContextOptions

logger = logging.getLogger(__name__)


def context_endpoint(
    handler: ContextHandler, *, options: ContextOptions | None = None
) -> Endpoint:
    """Return an endpoint ``(request) -> Response`` that runs handler.

    The handler writes through its RequestContext and may stop early by
    raising the error a context helper reported. Exceptions that were never
    written propagate to the host app.
    """
    opts = options or DEFAULT_OPTIONS

    async def endpoint(request: Request) -> Response:
        ctx = RequestContext(request=request, options=opts)
        try:
            await handler(ctx)
        except UnsupportedFormTarget:
            raise
        except Exception as exc:
            if exc is ctx.reported:
                logger.debug(
                    "%s %s stopped after reporting %s",
                    request.method,
                    request.url.path,
                    type(exc).__name__,
                )
            elif isinstance(exc, ContextException) and not ctx.response.written:
                ctx.error(exc, exc.status_code)
            else:
                raise
        finally:
            # Releases spooled uploads of a parsed form
            await request.close()
        return ctx.response.to_response()

    endpoint.__name__ = getattr(handler, "__name__", endpoint.__name__)
    endpoint.__qualname__ = getattr(handler, "__qualname__", endpoint.__qualname__)
    endpoint.__doc__ = handler.__doc__
    endpoint._context_handler = handler  # type: ignore[attr-defined]
    return endpoint


def context_dependency(options: ContextOptions | None = None) -> ContextProvider:
    """Return a FastAPI dependency that provides a fresh RequestContext.

    Routes using it return ``ctx.response.to_response()``; pair it with
    register_error_handlers() so raised context errors reach the client.
    A parsed form is closed once the request is done.
    """
    opts = options or DEFAULT_OPTIONS

    async def dependency(request: Request) -> AsyncIterator[RequestContext]:
        try:
            yield RequestContext(request=request, options=opts)
        finally:
            await request.close()

    return dependency


def register_error_handlers(app: Any) -> None:
    """Install the ContextException handler on a Starlette or FastAPI app."""
    from starlette.applications import Starlette

    if not isinstance(app, Starlette):
        return

    app.add_exception_handler(ContextException, _handle_context_exception)


async def _handle_context_exception(request: Request, exc: Exception) -> Response:
    if not isinstance(exc, ContextException):
        raise exc
    ctx = RequestContext.of(request)
    if ctx is not None and ctx.reported is exc:
        return ctx.response.to_response()
    return PlainTextResponse(
        f"{exc.detail}\n",
        status_code=exc.status_code,
        headers={"X-Content-Type-Options": "nosniff"},
    )
