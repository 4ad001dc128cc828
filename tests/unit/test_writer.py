"""Tests for ResponseWriter."""

from __future__ import annotations

import logging

import pytest

from fastapi_request_context.writer import ResponseWriter


class TestResponseWriter:
    def test_defaults(self) -> None:
        writer = ResponseWriter()
        assert writer.status_code == 200
        assert not writer.written
        assert writer.body == b""

    def test_write_flushes_200(self) -> None:
        writer = ResponseWriter()
        assert writer.write(b"hello") == 5
        assert writer.written
        assert writer.status_code == 200
        assert writer.body == b"hello"

    def test_write_header_sets_status(self) -> None:
        writer = ResponseWriter()
        writer.write_header(201)
        writer.write(b"a")
        writer.write(b"b")
        assert writer.status_code == 201
        assert writer.body == b"ab"

    def test_second_write_header_is_ignored(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        writer = ResponseWriter()
        writer.write_header(200)
        with caplog.at_level(logging.WARNING, logger="fastapi_request_context.writer"):
            writer.write_header(500)
        assert writer.status_code == 200
        assert "superfluous write_header" in caplog.text

    def test_rejects_invalid_status(self) -> None:
        with pytest.raises(ValueError):
            ResponseWriter().write_header(42)

    def test_headers_after_flush_do_not_reach_response(self) -> None:
        writer = ResponseWriter()
        writer.headers["content-type"] = "application/json"
        writer.write(b"{}")
        writer.headers["content-type"] = "text/plain"
        writer.headers["x-late"] = "1"
        response = writer.to_response()
        assert response.headers["content-type"] == "application/json"
        assert "x-late" not in response.headers

    def test_to_response(self) -> None:
        writer = ResponseWriter()
        writer.headers["x-request-id"] = "abc"
        writer.write_header(404)
        writer.write(b"missing\n")
        response = writer.to_response()
        assert response.status_code == 404
        assert response.body == b"missing\n"
        assert response.headers["x-request-id"] == "abc"
        assert response.headers["content-length"] == "8"

    def test_unwritten_response_is_empty_200(self) -> None:
        writer = ResponseWriter()
        writer.headers["x-pending"] = "yes"
        response = writer.to_response()
        assert response.status_code == 200
        assert response.body == b""
        assert response.headers["x-pending"] == "yes"

    def test_repeated_headers_are_kept(self) -> None:
        writer = ResponseWriter()
        writer.headers.append("set-cookie", "a=1")
        writer.headers.append("set-cookie", "b=2")
        response = writer.to_response()
        assert response.headers.getlist("set-cookie") == ["a=1", "b=2"]
