"""JSON rendering used by RequestContext.encode()."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence, Set
from typing import Any

from fastapi.encoders import jsonable_encoder

EMPTY_ARRAY = b"[]\n"
EMPTY_OBJECT = b"{}\n"

_HTML_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def is_sequence(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray, memoryview)):
        return False
    return isinstance(value, (Sequence, Set))


def encode_json(
    value: Any, *, indent: str | int | None = "\t", escape_html: bool = True
) -> bytes:
    """Render value as newline-terminated JSON.

    Empty sequences and mappings short-circuit to ``[]`` and ``{}`` so an
    empty collection never renders as anything else. Raises ``ValueError``
    or ``TypeError`` when the value cannot be represented.
    """
    if is_sequence(value) and len(value) == 0:
        return EMPTY_ARRAY
    if isinstance(value, Mapping) and len(value) == 0:
        return EMPTY_OBJECT

    text = json.dumps(
        jsonable_encoder(value), indent=indent, ensure_ascii=False, allow_nan=False
    )
    # Only string contents can hold these characters
    if escape_html:
        text = text.translate(_HTML_ESCAPES)
    return (text + "\n").encode("utf-8")
