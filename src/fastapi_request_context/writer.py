"""ResponseWriter — buffered response sink with write-once status."""

from __future__ import annotations

import logging

from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import Response

logger = logging.getLogger(__name__)


class ResponseWriter:
    """Collects status, headers and body for a single response.

    The status and headers are fixed by the first ``write_header`` (or the
    first ``write``, which flushes a 200). Header changes made afterwards do
    not reach the produced response.
    """

    def __init__(self) -> None:
        self._headers = MutableHeaders()
        self._status_code: int | None = None
        self._sent_headers: Headers | None = None
        self._body = bytearray()

    @property
    def headers(self) -> MutableHeaders:
        return self._headers

    @property
    def status_code(self) -> int:
        return self._status_code if self._status_code is not None else 200

    @property
    def written(self) -> bool:
        return self._status_code is not None

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write_header(self, status_code: int) -> None:
        if not 100 <= status_code <= 999:
            raise ValueError(f"invalid status code {status_code}")
        if self._status_code is not None:
            logger.warning(
                "superfluous write_header call (status %d ignored, %d already sent)",
                status_code,
                self._status_code,
            )
            return
        self._status_code = status_code
        self._sent_headers = Headers(raw=list(self._headers.raw))

    def write(self, data: bytes) -> int:
        if self._status_code is None:
            self.write_header(200)
        self._body.extend(data)
        return len(data)

    def to_response(self) -> Response:
        response = Response(content=bytes(self._body), status_code=self.status_code)
        headers = self._sent_headers if self._sent_headers is not None else self._headers
        for key, value in headers.items():
            if key == "content-length":
                continue
            response.headers.append(key, value)
        return response
