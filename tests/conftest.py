"""Shared test fixtures for all test modules."""

from collections.abc import Callable, Iterator

import httpx
import pytest

from transferstats.adapters.sinks import InMemoryMetricSink, SinkDefaults
from transferstats.core.models import IdentityMetadata


@pytest.fixture
def sink_defaults() -> SinkDefaults:
    """Sink defaults with a fixed host so records compare equal."""
    return SinkDefaults(host="collector.example", plugin="curl")


@pytest.fixture
def metric_sink(sink_defaults: SinkDefaults) -> InMemoryMetricSink:
    """Fixture providing an empty in-memory metric sink."""
    return InMemoryMetricSink(sink_defaults)


@pytest.fixture
def identity() -> IdentityMetadata:
    """Identity with every field set, used by most dispatch tests."""
    return IdentityMetadata(
        host="web01",
        plugin="curl_json",
        plugin_instance="api",
        type_instance_prefix="http_",
    )


# === httpx Fixtures ===


def _default_handler(request: httpx.Request) -> httpx.Response:
    """Redirect /old to /new; answer POST with 201 and 200 otherwise.

    Bodies are iterators so that httpx streams them through the transport,
    which is what sets ``elapsed`` and ``num_bytes_downloaded``.
    """
    if request.url.path == "/old":
        return httpx.Response(302, headers={"Location": "/new"}, content=iter([]))
    if request.method == "POST":
        return httpx.Response(
            201, headers={"Content-Length": "7"}, content=iter([b"created"])
        )
    return httpx.Response(
        200, headers={"Content-Length": "11"}, content=iter([b"hello world"])
    )


@pytest.fixture
def mock_client() -> Iterator[httpx.Client]:
    """httpx.Client backed by a MockTransport, no network involved.

    Usage:
        def test_something(mock_client):
            response = mock_client.get("/old")
    """
    with httpx.Client(
        transport=httpx.MockTransport(_default_handler),
        base_url="http://test",
        follow_redirects=True,
    ) as client:
        yield client


@pytest.fixture
def mock_client_factory() -> Callable[..., httpx.Client]:
    """Factory fixture creating MockTransport clients for a custom handler."""

    def _client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        return httpx.Client(
            transport=httpx.MockTransport(handler),
            base_url="http://test",
            follow_redirects=True,
        )

    return _client
