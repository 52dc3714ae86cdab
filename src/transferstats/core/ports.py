"""Port interfaces for transfer-info sources and metric sinks.

These protocols define the contracts that adapters must implement.
The core depends only on these interfaces, not concrete implementations.
"""

from typing import Protocol, runtime_checkable

from transferstats.core.models import MetricRecord


@runtime_checkable
class TransferInfoSource(Protocol):
    """Port for reading statistics of a completed transfer.

    Examples: HttpxTransferInfo.
    """

    def get_info(self, info_key: str) -> float | int:
        """Return the raw value stored under info_key.

        Args:
            info_key: Registry info key (e.g., "TOTAL_TIME").

        Returns:
            A float for times, sizes and speeds, an int for counts.

        Raises:
            Any exception when the value cannot be retrieved.
        """
        ...


@runtime_checkable
class MetricSink(Protocol):
    """Port for receiving finished metric records.

    Examples: InMemoryMetricSink, RingBufferMetricSink.
    """

    def write(self, record: MetricRecord) -> None:
        """Accept one record, raising to reject it."""
        ...
