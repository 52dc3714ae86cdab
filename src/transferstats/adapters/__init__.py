"""Adapters connecting transferstats to HTTP clients and metric sinks."""

from transferstats.adapters.httpx_source import HttpxTransferInfo, TransferTrace
from transferstats.adapters.sinks import (
    InMemoryMetricSink,
    RingBufferMetricSink,
    SinkDefaults,
)

__all__ = [
    "HttpxTransferInfo",
    "InMemoryMetricSink",
    "RingBufferMetricSink",
    "SinkDefaults",
    "TransferTrace",
]
