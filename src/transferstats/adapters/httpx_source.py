"""Transfer-info source adapter for completed httpx responses.

httpx exposes sizes, redirects and total elapsed time on the response
itself. Phase timings (connect, TLS handshake, first byte) are only known
to httpcore, which reports them through the ``trace`` request extension;
pass a TransferTrace there to make them available.
"""

import time
from collections.abc import Callable
from typing import Any

import httpx

from transferstats.core.errors import InfoUnavailableError

_CONNECT_DONE = "connection.connect_tcp.complete"
_TLS_DONE = "connection.start_tls.complete"
_REQUEST_HEADERS_STARTED = (
    "http11.send_request_headers.started",
    "http2.send_request_headers.started",
)
_RESPONSE_HEADERS_DONE = (
    "http11.receive_response_headers.complete",
    "http2.receive_response_headers.complete",
)


class TransferTrace:
    """httpcore trace callback recording when each transfer phase happened.

    Offsets are seconds since the trace was created, not since the request
    started, so create the trace right before sending. Only the first
    occurrence of each event is kept: when redirects are followed, the
    phase offsets describe the first hop while `connects` counts every hop.

    Example:
        ```python
        trace = TransferTrace()
        response = client.get(url, extensions={"trace": trace})
        source = HttpxTransferInfo.from_response(response)
        ```
    """

    def __init__(self) -> None:
        self._started = time.perf_counter()
        self._offsets: dict[str, float] = {}
        self.connects = 0

    def __call__(self, event_name: str, info: dict[str, Any]) -> None:
        """Record one httpcore trace event."""
        self._offsets.setdefault(event_name, time.perf_counter() - self._started)
        if event_name == _CONNECT_DONE:
            self.connects += 1

    def offset(self, *event_names: str) -> float | None:
        """Return the offset of the first recorded event among event_names."""
        for name in event_names:
            if name in self._offsets:
                return self._offsets[name]
        return None

    @property
    def events(self) -> tuple[str, ...]:
        """Names of the recorded events, in the order first seen."""
        return tuple(self._offsets)


def _request_head_size(request: httpx.Request, http_version: str) -> int:
    request_line = (
        f"{request.method} {request.url.raw_path.decode('ascii')} "
        f"{http_version}\r\n"
    )
    size = len(request_line.encode("ascii")) + 2
    for name, value in request.headers.raw:
        size += len(name) + len(value) + 4
    return size


def _response_head_size(response: httpx.Response) -> int:
    status_line = (
        f"{response.http_version} {response.status_code} "
        f"{response.reason_phrase}\r\n"
    )
    size = len(status_line.encode("ascii", errors="replace")) + 2
    for name, value in response.headers.raw:
        size += len(name) + len(value) + 4
    return size


def _elapsed_seconds(hop: httpx.Response, info_key: str) -> float:
    try:
        return hop.elapsed.total_seconds()
    except RuntimeError as e:
        # httpx only times bodies that stream through the transport
        raise InfoUnavailableError(info_key, "response was not closed") from e


class HttpxTransferInfo:
    """Implementation of TransferInfoSource over a completed httpx.Response.

    Keys that need phase timings raise InfoUnavailableError unless a
    TransferTrace is attached. NAMELOOKUP_TIME is never available because
    httpcore resolves host names as part of the TCP connect.
    """

    def __init__(
        self, response: httpx.Response, trace: TransferTrace | None = None
    ) -> None:
        self._response = response
        self._trace = trace
        self._getters: dict[str, Callable[[], float | int]] = {
            "TOTAL_TIME": self._total_time,
            "NAMELOOKUP_TIME": self._namelookup_time,
            "CONNECT_TIME": self._connect_time,
            "PRETRANSFER_TIME": self._pretransfer_time,
            "SIZE_UPLOAD": self._size_upload,
            "SIZE_DOWNLOAD": self._size_download,
            "SPEED_DOWNLOAD": self._speed_download,
            "SPEED_UPLOAD": self._speed_upload,
            "HEADER_SIZE": self._header_size,
            "REQUEST_SIZE": self._request_size,
            "CONTENT_LENGTH_DOWNLOAD": self._content_length_download,
            "CONTENT_LENGTH_UPLOAD": self._content_length_upload,
            "STARTTRANSFER_TIME": self._starttransfer_time,
            "REDIRECT_TIME": self._redirect_time,
            "REDIRECT_COUNT": self._redirect_count,
            "NUM_CONNECTS": self._num_connects,
            "APPCONNECT_TIME": self._appconnect_time,
        }

    @classmethod
    def from_response(cls, response: httpx.Response) -> "HttpxTransferInfo":
        """Wrap a response, using the TransferTrace of its request if any."""
        trace = response.request.extensions.get("trace")
        return cls(response, trace if isinstance(trace, TransferTrace) else None)

    def get_info(self, info_key: str) -> float | int:
        """Return the raw value stored under info_key.

        Raises:
            KeyError: info_key is not a known transfer-info key.
            InfoUnavailableError: The value is not known for this transfer.
        """
        try:
            getter = self._getters[info_key]
        except KeyError:
            raise KeyError(info_key) from None
        return getter()

    def _require_trace(self, info_key: str) -> TransferTrace:
        if self._trace is None:
            raise InfoUnavailableError(info_key, "no transfer trace attached")
        return self._trace

    @property
    def _hops(self) -> list[httpx.Response]:
        return [*self._response.history, self._response]

    def _request_body_size(
        self, info_key: str, request: httpx.Request | None = None
    ) -> int:
        if request is None:
            request = self._response.request
        try:
            return len(request.content)
        except httpx.RequestNotRead as e:
            raise InfoUnavailableError(info_key, "request body was streamed") from e

    def _total_time(self, info_key: str = "TOTAL_TIME") -> float:
        return sum((_elapsed_seconds(hop, info_key) for hop in self._hops), 0.0)

    def _namelookup_time(self) -> float:
        raise InfoUnavailableError(
            "NAMELOOKUP_TIME", "name resolution is part of the TCP connect"
        )

    def _connect_time(self) -> float:
        # No connect event means the connection was reused
        offset = self._require_trace("CONNECT_TIME").offset(_CONNECT_DONE)
        return 0.0 if offset is None else offset

    def _appconnect_time(self) -> float:
        offset = self._require_trace("APPCONNECT_TIME").offset(_TLS_DONE)
        return 0.0 if offset is None else offset

    def _pretransfer_time(self) -> float:
        offset = self._require_trace("PRETRANSFER_TIME").offset(
            *_REQUEST_HEADERS_STARTED
        )
        if offset is None:
            raise InfoUnavailableError("PRETRANSFER_TIME", "request was never sent")
        return offset

    def _starttransfer_time(self) -> float:
        offset = self._require_trace("STARTTRANSFER_TIME").offset(
            *_RESPONSE_HEADERS_DONE
        )
        if offset is None:
            raise InfoUnavailableError(
                "STARTTRANSFER_TIME", "no response headers received"
            )
        return offset

    def _num_connects(self) -> int:
        return self._require_trace("NUM_CONNECTS").connects

    def _size_upload(self) -> float:
        return float(self._request_body_size("SIZE_UPLOAD"))

    def _size_download(self, info_key: str = "SIZE_DOWNLOAD") -> float:
        response = self._response
        if not response.is_stream_consumed:
            raise InfoUnavailableError(info_key, "response body has not been read")
        downloaded = response.num_bytes_downloaded
        if downloaded == 0:
            try:
                preloaded = bool(response.content)
            except httpx.ResponseNotRead:
                preloaded = False
            if preloaded:
                raise InfoUnavailableError(
                    info_key, "body was loaded before the transfer"
                )
        return float(downloaded)

    def _speed_download(self) -> float:
        total = self._total_time("SPEED_DOWNLOAD")
        return self._size_download("SPEED_DOWNLOAD") / total if total > 0 else 0.0

    def _speed_upload(self) -> float:
        total = self._total_time("SPEED_UPLOAD")
        return self._size_upload() / total if total > 0 else 0.0

    def _header_size(self) -> int:
        return sum(_response_head_size(hop) for hop in self._hops)

    def _request_size(self) -> int:
        return sum(
            _request_head_size(hop.request, hop.http_version)
            + self._request_body_size("REQUEST_SIZE", hop.request)
            for hop in self._hops
        )

    def _content_length_download(self) -> float:
        value = self._response.headers.get("content-length")
        return -1.0 if value is None else float(value)

    def _content_length_upload(self) -> float:
        value = self._response.request.headers.get("content-length")
        return -1.0 if value is None else float(value)

    def _redirect_count(self) -> int:
        return len(self._response.history)

    def _redirect_time(self) -> float:
        return sum(
            (
                _elapsed_seconds(hop, "REDIRECT_TIME")
                for hop in self._response.history
            ),
            0.0,
        )
