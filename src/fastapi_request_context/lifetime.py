"""Lifetime — cancellation and deadline handle for a single request."""

from __future__ import annotations

import time
from typing import Any

from starlette.requests import Request


class Lifetime:
    """Cancellation/deadline handle inherited from the inbound request.

    Pass it to downstream calls that should stop when the client goes away
    or the request runs out of time. The request context itself never
    checks it.
    """

    def __init__(self, request: Request, *, deadline: float | None = None) -> None:
        self._request = request
        self.deadline = deadline

    @classmethod
    def from_request(cls, request: Request, *, timeout: float | None = None) -> Lifetime:
        deadline = time.monotonic() + timeout if timeout is not None else None
        return cls(request, deadline=deadline)

    @property
    def state(self) -> Any:
        """Request-scoped values shared with middleware (``request.state``)."""
        return self._request.state

    def remaining(self) -> float | None:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    async def cancelled(self) -> bool:
        if self.expired():
            return True
        return await self._request.is_disconnected()
