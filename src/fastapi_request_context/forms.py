"""Form value targets — FormKind, text capabilities and scalar parsers."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from fastapi_request_context.exceptions import UnsupportedFormTarget, quote

_SIGNED = re.compile(r"[+-]?[0-9]+", re.ASCII)
_UNSIGNED = re.compile(r"[0-9]+", re.ASCII)

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


@runtime_checkable
class TextUnmarshaler(Protocol):
    """Target that fills itself from raw form bytes."""

    def unmarshal_text(self, text: bytes) -> None: ...


@runtime_checkable
class StringLoader(Protocol):
    """Target that fills itself from a form string."""

    def load_string(self, value: str) -> None: ...


class FormKind(Enum):
    """Scalar and list kinds a form value can be parsed into."""

    STRING = "string"
    STRINGS = "strings"
    INT = "int"
    INT64 = "int64"
    UINT64 = "uint64"
    BOOL = "bool"


def parse_int(text: str, *, bits: int = 64) -> int:
    if not _SIGNED.fullmatch(text):
        raise ValueError(f"parsing {quote(text)}: invalid syntax")
    value = int(text)
    bound = 1 << (bits - 1)
    if not -bound <= value < bound:
        raise ValueError(f"parsing {quote(text)}: value out of range")
    return value


def parse_uint(text: str, *, bits: int = 64) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(f"parsing {quote(text)}: invalid syntax")
    value = int(text)
    if value >= 1 << bits:
        raise ValueError(f"parsing {quote(text)}: value out of range")
    return value


def parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"parsing {quote(text)}: invalid syntax")


def check_form_target(target: Any) -> None:
    """Raise UnsupportedFormTarget unless target is a capability or FormKind."""
    if isinstance(target, (TextUnmarshaler, StringLoader, FormKind)):
        return
    raise UnsupportedFormTarget(f"unsupported type {type(target).__qualname__}")


def parse_form_value(text: str, target: Any, *, separator: str = ",") -> Any:
    """Convert text according to target.

    Capabilities win over kinds; ``unmarshal_text`` is tried before
    ``load_string``. Capability targets are filled in place and returned.
    Parse failures raise ``ValueError``; a target that is neither a
    capability nor a FormKind raises UnsupportedFormTarget.
    """
    if isinstance(target, TextUnmarshaler):
        target.unmarshal_text(text.encode("utf-8"))
        return target
    if isinstance(target, StringLoader):
        target.load_string(text)
        return target

    if target is FormKind.STRING:
        return text
    if target is FormKind.STRINGS:
        return text.split(separator)
    if target is FormKind.INT or target is FormKind.INT64:
        return parse_int(text, bits=64)
    if target is FormKind.UINT64:
        return parse_uint(text, bits=64)
    if target is FormKind.BOOL:
        return parse_bool(text)

    raise UnsupportedFormTarget(f"unsupported type {type(target).__qualname__}")
