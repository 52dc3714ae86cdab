"""In-memory metric sink adapter."""

from transferstats.adapters.sinks.base import SinkDefaults, _apply_defaults
from transferstats.core.models import MetricRecord


class InMemoryMetricSink:
    """In-memory implementation of MetricSink.

    Stores metric records in a list. Suitable for testing and
    low-volume applications where persistence is not required.
    """

    def __init__(self, defaults: SinkDefaults | None = None) -> None:
        self._defaults = defaults or SinkDefaults()
        self._records: list[MetricRecord] = []

    def write(self, record: MetricRecord) -> None:
        """Write a metric record to the sink."""
        self._records.append(_apply_defaults(record, self._defaults))

    def records(self) -> list[MetricRecord]:
        """Return all records in the order they were written."""
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)
