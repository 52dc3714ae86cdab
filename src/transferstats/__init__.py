"""Selectable HTTP transfer statistics emitted as typed metric records."""

from transferstats.adapters.httpx_source import HttpxTransferInfo, TransferTrace
from transferstats.adapters.sinks import (
    InMemoryMetricSink,
    RingBufferMetricSink,
    SinkDefaults,
)
from transferstats.core.dispatch import StatsDispatcher, dispatch
from transferstats.core.errors import (
    ConfigError,
    DispatchError,
    EmitError,
    InfoUnavailableError,
    InvalidValueError,
    QueryError,
    SourceUnavailableError,
    TransferStatsError,
    UnknownFieldError,
)
from transferstats.core.models import (
    Extraction,
    FieldSpec,
    IdentityMetadata,
    MetricKind,
    MetricRecord,
)
from transferstats.core.ports import MetricSink, TransferInfoSource
from transferstats.core.registry import FIELD_SPECS, field_names, lookup
from transferstats.core.selection import (
    Selection,
    build_selection,
    is_true,
    selection_from_config,
)

__all__ = [
    # Registry
    "FIELD_SPECS",
    "field_names",
    "lookup",
    # Selection
    "Selection",
    "build_selection",
    "is_true",
    "selection_from_config",
    # Dispatch
    "StatsDispatcher",
    "dispatch",
    # Models
    "Extraction",
    "FieldSpec",
    "IdentityMetadata",
    "MetricKind",
    "MetricRecord",
    # Ports
    "MetricSink",
    "TransferInfoSource",
    # Adapters
    "HttpxTransferInfo",
    "InMemoryMetricSink",
    "RingBufferMetricSink",
    "SinkDefaults",
    "TransferTrace",
    # Errors
    "ConfigError",
    "DispatchError",
    "EmitError",
    "InfoUnavailableError",
    "InvalidValueError",
    "QueryError",
    "SourceUnavailableError",
    "TransferStatsError",
    "UnknownFieldError",
]
