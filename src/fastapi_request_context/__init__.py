"""FastAPI Request Context - JSON, form and error helpers for request handlers."""

from fastapi_request_context.context import RequestContext
from fastapi_request_context.dependency import (
    context_dependency,
    context_endpoint,
    register_error_handlers,
)
from fastapi_request_context.encoding import encode_json
from fastapi_request_context.exceptions import (
    ContextException,
    DecodeError,
    FormValueError,
    InternalError,
    UnsupportedFormTarget,
)
from fastapi_request_context.forms import FormKind, StringLoader, TextUnmarshaler
from fastapi_request_context.lifetime import Lifetime
from fastapi_request_context.options import ContextOptions
from fastapi_request_context.writer import ResponseWriter

__all__ = [
    "ContextException",
    "ContextOptions",
    "DecodeError",
    "FormKind",
    "FormValueError",
    "InternalError",
    "Lifetime",
    "RequestContext",
    "ResponseWriter",
    "StringLoader",
    "TextUnmarshaler",
    "UnsupportedFormTarget",
    "context_dependency",
    "context_endpoint",
    "encode_json",
    "register_error_handlers",
]
