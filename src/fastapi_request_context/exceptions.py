"""ContextException hierarchy for errors reported through a RequestContext."""

from __future__ import annotations


class ContextException(Exception):
    """Base for errors that carry an HTTP status code."""

    def __init__(self, detail: str, *, status_code: int = 500) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class DecodeError(ContextException):
    """Request body could not be decoded into the target type (400)."""

    def __init__(self, target_name: str, cause: Exception) -> None:
        super().__init__(
            f"couldn't decode request type ({target_name}): {cause}", status_code=400
        )
        self.target_name = target_name
        self.cause = cause


class FormValueError(ContextException):
    """Form or query field held malformed text (400)."""

    def __init__(self, key: str, cause: Exception) -> None:
        super().__init__(f"invalid form value {quote(key)}: {cause}", status_code=400)
        self.key = key
        self.cause = cause


class InternalError(ContextException):
    """Unexpected failure wrapped with a caller-supplied message (500)."""

    def __init__(self, message: str, cause: BaseException) -> None:
        super().__init__(f"{message}: {cause}", status_code=500)
        self.cause = cause


class UnsupportedFormTarget(TypeError):
    """decode_form() was called with a target it cannot fill.

    Not a ContextException: this is a defect in handler code and is never
    turned into an HTTP response.
    """


def quote(text: str) -> str:
    """Double-quote text, escaping quotes, backslashes and control characters."""
    out = ['"']
    for char in text:
        if char in ('"', "\\"):
            out.append("\\" + char)
        elif char == "\n":
            out.append("\\n")
        elif char == "\t":
            out.append("\\t")
        elif char == "\r":
            out.append("\\r")
        elif not char.isprintable():
            code = ord(char)
            out.append(f"\\x{code:02x}" if code < 0x100 else f"\\u{code:04x}")
        else:
            out.append(char)
    out.append('"')
    return "".join(out)
