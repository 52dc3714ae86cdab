"""Metric sink adapters implementing the MetricSink port."""

from transferstats.adapters.sinks.base import SinkDefaults
from transferstats.adapters.sinks.in_memory import InMemoryMetricSink
from transferstats.adapters.sinks.ring_buffer import RingBufferMetricSink

__all__ = [
    "InMemoryMetricSink",
    "RingBufferMetricSink",
    "SinkDefaults",
]
