"""Core domain models for transfer statistics."""

from dataclasses import dataclass
from enum import Enum


class Extraction(Enum):
    """How a raw transfer-info value is turned into a metric value."""

    GAUGE = "gauge"
    SPEED = "speed"
    INTEGER_COUNT = "integer_count"


class MetricKind(str, Enum):
    """Metric type attached to emitted records."""

    DURATION = "duration"
    BYTES = "bytes"
    BITRATE = "bitrate"
    COUNT = "count"


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one reportable statistic.

    Attributes:
        name: Field name used in configuration and as type instance suffix.
        extraction: Conversion rule applied to the raw value.
        metric_kind: Metric type of the emitted record.
        info_key: Key used to query the transfer-info source.
    """

    name: str
    extraction: Extraction
    metric_kind: MetricKind
    info_key: str


@dataclass(frozen=True)
class IdentityMetadata:
    """Identity strings attached to every metric from one dispatch call.

    Attributes:
        host: Host name, empty to keep the sink default.
        plugin: Plugin name, empty to keep the sink default.
        plugin_instance: Plugin instance, empty to keep the sink default.
        type_instance_prefix: Prepended to each field name.
    """

    host: str = ""
    plugin: str = ""
    plugin_instance: str = ""
    type_instance_prefix: str = ""


@dataclass(frozen=True)
class MetricRecord:
    """A single emitted statistic.

    Attributes:
        type: Metric kind (e.g., duration, bytes).
        type_instance: Prefix followed by the field name.
        value: The converted metric value.
        host: Host name, or None for the sink default.
        plugin: Plugin name, or None for the sink default.
        plugin_instance: Plugin instance, or None for the sink default.
    """

    type: str
    type_instance: str
    value: float
    host: str | None = None
    plugin: str | None = None
    plugin_instance: str | None = None
