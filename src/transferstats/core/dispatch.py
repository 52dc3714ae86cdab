"""Dispatch of selected transfer statistics to a metric sink."""

import logging

from transferstats.core.errors import EmitError, QueryError, SourceUnavailableError
from transferstats.core.models import (
    Extraction,
    FieldSpec,
    IdentityMetadata,
    MetricRecord,
)
from transferstats.core.ports import MetricSink, TransferInfoSource
from transferstats.core.registry import FIELD_SPECS
from transferstats.core.selection import Selection

logger = logging.getLogger(__name__)

# Largest magnitude a float64 holds without losing integer precision
MAX_EXACT_COUNT = 2**53


def _gauge(raw: float | int) -> float:
    return float(raw)


def _speed(raw: float | int) -> float:
    """Convert bytes/second to bits/second."""
    return float(raw) * 8


def _integer_count(raw: float | int) -> float:
    count = int(raw)
    if abs(count) > MAX_EXACT_COUNT:
        raise OverflowError(f"{count} cannot be represented exactly as a float")
    return float(count)


def convert(extraction: Extraction, raw: float | int) -> float:
    """Convert a raw transfer-info value according to its extraction rule.

    Args:
        extraction: Extraction rule of the field.
        raw: Value returned by the transfer-info source.

    Returns:
        The metric value.

    Raises:
        OverflowError: An integer count is too large for an exact float.
    """
    if extraction is Extraction.GAUGE:
        return _gauge(raw)
    if extraction is Extraction.SPEED:
        return _speed(raw)
    if extraction is Extraction.INTEGER_COUNT:
        return _integer_count(raw)
    raise ValueError(f"Unknown extraction {extraction!r}")


def _make_record(
    spec: FieldSpec, value: float, identity: IdentityMetadata
) -> MetricRecord:
    return MetricRecord(
        type=spec.metric_kind.value,
        type_instance=f"{identity.type_instance_prefix or ''}{spec.name}",
        value=value,
        host=identity.host or None,
        plugin=identity.plugin or None,
        plugin_instance=identity.plugin_instance or None,
    )


def dispatch(
    selection: Selection | None,
    source: TransferInfoSource | None,
    identity: IdentityMetadata,
    sink: MetricSink,
) -> None:
    """Emit one metric per enabled field of a completed transfer.

    Fields are processed in registry order. The first failure aborts the
    call; records emitted before it stay emitted.

    Args:
        selection: Enabled fields, or None when statistics are disabled.
        source: Transfer-info source of the completed transfer.
        identity: Identity strings attached to every record.
        sink: Receiver of the records.

    Raises:
        SourceUnavailableError: selection is given but source is None.
        QueryError: A field could not be read or converted.
        EmitError: The sink rejected a record.
    """
    if selection is None:
        return
    if source is None:
        raise SourceUnavailableError()

    emitted = 0
    for spec in FIELD_SPECS:
        if spec.name not in selection.enabled:
            continue

        try:
            value = convert(spec.extraction, source.get_info(spec.info_key))
        except Exception as e:
            logger.warning(
                "transfer stats: querying %s failed after %d records: %s",
                spec.name,
                emitted,
                e,
            )
            raise QueryError(spec.name) from e

        record = _make_record(spec, value, identity)
        try:
            sink.write(record)
        except Exception as e:
            logger.warning(
                "transfer stats: emitting %s failed after %d records: %s",
                spec.name,
                emitted,
                e,
            )
            raise EmitError(spec.name) from e
        emitted += 1

    logger.debug("transfer stats: dispatched %d records", emitted)


class StatsDispatcher:
    """Dispatcher bound to a selection, identity and sink.

    Example:
        ```python
        dispatcher = StatsDispatcher(
            selection_from_config({"total_time": True}),
            InMemoryMetricSink(),
            IdentityMetadata(plugin="curl", type_instance_prefix="api_"),
        )
        dispatcher.dispatch(HttpxTransferInfo.from_response(response))
        ```
    """

    def __init__(
        self,
        selection: Selection | None,
        sink: MetricSink,
        identity: IdentityMetadata | None = None,
    ) -> None:
        """Bind the dispatcher.

        Args:
            selection: Enabled fields, or None to disable statistics.
            sink: Receiver of the records.
            identity: Identity strings (default: all empty).
        """
        self.selection = selection
        self.sink = sink
        self.identity = identity or IdentityMetadata()

    @property
    def enabled(self) -> bool:
        """True unless statistics collection is disabled."""
        return self.selection is not None

    def dispatch(self, source: TransferInfoSource | None) -> None:
        """Dispatch the statistics of one completed transfer."""
        dispatch(self.selection, source, self.identity, self.sink)
