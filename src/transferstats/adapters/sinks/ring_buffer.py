"""Ring buffer metric sink adapter.

Provides bounded in-memory storage that automatically evicts the oldest
records when the buffer is full. Useful for long-running services that
need predictable memory usage.
"""

from collections import deque

from transferstats.adapters.sinks.base import SinkDefaults, _apply_defaults
from transferstats.core.models import MetricRecord


class RingBufferMetricSink:
    """Ring buffer implementation of MetricSink.

    Stores metric records in a fixed-size circular buffer. When the buffer
    is full, the oldest record is automatically evicted to make room for
    new records.

    Args:
        max_size: Maximum number of records to keep.
        defaults: Identity values for records that leave them unset.
    """

    def __init__(self, max_size: int, defaults: SinkDefaults | None = None) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._defaults = defaults or SinkDefaults()
        self._buffer: deque[MetricRecord] = deque(maxlen=max_size)

    def write(self, record: MetricRecord) -> None:
        """Write a metric record, evicting the oldest one if full."""
        self._buffer.append(_apply_defaults(record, self._defaults))

    def records(self) -> list[MetricRecord]:
        """Return the retained records, oldest first."""
        return list(self._buffer)

    def clear(self) -> None:
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)
