"""Tests for Lifetime."""

from __future__ import annotations

import time
from typing import Any

from fastapi_request_context.lifetime import Lifetime


class TestLifetime:
    def test_no_deadline_by_default(self, make_request: Any) -> None:
        lifetime = Lifetime.from_request(make_request())
        assert lifetime.deadline is None
        assert lifetime.remaining() is None
        assert not lifetime.expired()

    def test_timeout_sets_deadline(self, make_request: Any) -> None:
        before = time.monotonic()
        lifetime = Lifetime.from_request(make_request(), timeout=10)
        assert lifetime.deadline is not None
        assert lifetime.deadline >= before + 10

    def test_past_deadline_is_expired(self, make_request: Any) -> None:
        lifetime = Lifetime(make_request(), deadline=time.monotonic() - 1)
        assert lifetime.expired()
        assert lifetime.remaining() == 0.0

    async def test_expired_is_cancelled(self, make_request: Any) -> None:
        lifetime = Lifetime(make_request(), deadline=time.monotonic() - 1)
        assert await lifetime.cancelled()

    async def test_disconnect_is_cancelled(self, make_request: Any) -> None:
        lifetime = Lifetime.from_request(make_request(disconnected=True))
        assert await lifetime.cancelled()

    async def test_connected_is_not_cancelled(self, make_request: Any) -> None:
        lifetime = Lifetime.from_request(make_request())
        assert not await lifetime.cancelled()

    def test_state_is_request_state(self, make_request: Any) -> None:
        request = make_request()
        request.state.user_id = "u-1"
        assert Lifetime.from_request(request).state.user_id == "u-1"
