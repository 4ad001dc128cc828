"""ContextOptions — per-application settings for request contexts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ContextOptions:
    """Immutable settings shared by every RequestContext built from them."""

    indent: str | int | None = "\t"
    escape_html: bool = True
    list_separator: str = ","
    strict_decode: bool = True
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.list_separator:
            raise ValueError("list_separator must not be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")


DEFAULT_OPTIONS = ContextOptions()
