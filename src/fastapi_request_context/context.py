"""RequestContext — per-request JSON, form and error helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from fastapi_request_context.encoding import encode_json
from fastapi_request_context.exceptions import (
    DecodeError,
    FormValueError,
    InternalError,
)
from fastapi_request_context.forms import check_form_target, parse_form_value
from fastapi_request_context.lifetime import Lifetime
from fastapi_request_context.options import DEFAULT_OPTIONS, ContextOptions
from fastapi_request_context.writer import ResponseWriter

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseException)

# Attribute on request.state pointing back at the RequestContext
STATE_ATTR = "request_context"

_FORM_METHODS = frozenset({"POST", "PUT", "PATCH"})
_FORM_CONTENT_TYPES = frozenset(
    {"application/x-www-form-urlencoded", "multipart/form-data"}
)


def type_name(target: Any) -> str:
    if isinstance(target, type):
        if target.__module__ == "builtins":
            return target.__qualname__
        return f"{target.__module__}.{target.__qualname__}"
    return repr(target)


@dataclass
class RequestContext:
    """Bundles the request, its response writer and its lifetime handle.

    One instance serves one request and is not shared between tasks. Every
    error helper writes the response immediately and hands the error back
    so the handler can stop.
    """

    request: Request
    response: ResponseWriter = field(default_factory=ResponseWriter)
    options: ContextOptions = DEFAULT_OPTIONS
    _lifetime: Lifetime = field(init=False, repr=False, compare=False)
    # Last error written through error()
    reported: BaseException | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self._lifetime = Lifetime.from_request(
            self.request, timeout=self.options.timeout
        )
        setattr(self.request.state, STATE_ATTR, self)

    @classmethod
    def of(cls, request: Request) -> RequestContext | None:
        """The context built for request, if any."""
        return getattr(request.state, STATE_ATTR, None)

    def context(self) -> Lifetime:
        """Cancellation/deadline handle to pass into downstream calls."""
        return self._lifetime

    def encode(self, value: Any) -> None:
        """Write value as a JSON response body.

        Empty sequences render as ``[]`` and empty mappings as ``{}``.
        Serialization failures are logged and leave the body empty.
        """
        self.response.headers["content-type"] = "application/json"
        try:
            payload = encode_json(
                value,
                indent=self.options.indent,
                escape_html=self.options.escape_html,
            )
        except (TypeError, ValueError) as exc:
            logger.error(
                "couldn't encode response type (%s) for %s %s: %s",
                type_name(type(value)),
                self.request.method,
                self.request.url.path,
                exc,
            )
            return
        self.response.write(payload)

    async def decode(self, target: Any) -> Any:
        """Validate the JSON request body into target and return the result.

        On failure a 400 response is written and DecodeError is raised.
        """
        adapter: TypeAdapter[Any] = TypeAdapter(target)
        body = await self.request.body()
        try:
            return adapter.validate_json(body, strict=self.options.strict_decode)
        except ValidationError as exc:
            raise self.error(DecodeError(type_name(target), exc), 400) from exc

    def error(self, err: E, status_code: int) -> E:
        """Write err as a plain-text response and return it unchanged."""
        self.reported = err

        logger.debug(
            "%s %s -> %d: %s",
            self.request.method,
            self.request.url.path,
            status_code,
            err,
        )

        headers = self.response.headers
        del headers["content-length"]
        headers["content-type"] = "text/plain; charset=utf-8"
        headers["x-content-type-options"] = "nosniff"
        self.response.write_header(status_code)
        self.response.write(f"{err}\n".encode())
        return err

    def check(self, message: str, err: BaseException | None) -> InternalError | None:
        """Report an unexpected err as a 500; no-op when err is None."""
        if err is None:
            return None
        wrapped = InternalError(message, err)
        wrapped.__cause__ = err
        return self.error(wrapped, 500)

    async def form_value(self, key: str) -> str:
        """First text value for key from the form body, then the query string.

        Returns an empty string when the key is absent.
        """
        if self.request.method in _FORM_METHODS:
            content_type = self.request.headers.get("content-type", "")
            media_type = content_type.split(";", 1)[0].strip().lower()
            if media_type in _FORM_CONTENT_TYPES:
                try:
                    form = await self.request.form()
                except (MultiPartException, HTTPException) as exc:
                    logger.debug("ignoring malformed form body: %s", exc)
                else:
                    for value in form.getlist(key):
                        if isinstance(value, str):
                            return value
        values = self.request.query_params.getlist(key)
        return values[0] if values else ""

    async def decode_form(self, key: str, target: Any, default: Any = None) -> Any:
        """Parse the form value for key according to target.

        target is a FormKind or an object with ``unmarshal_text`` or
        ``load_string``. An absent or empty value returns default and leaves
        target alone. Malformed text writes a 400 and raises FormValueError.
        An unsupported target raises UnsupportedFormTarget before the form is
        read, so it fails even when the key is absent.
        """
        check_form_target(target)
        text = await self.form_value(key)
        if not text:
            return default
        try:
            return parse_form_value(
                text, target, separator=self.options.list_separator
            )
        except ValueError as exc:
            raise self.error(FormValueError(key, exc), 400) from exc
