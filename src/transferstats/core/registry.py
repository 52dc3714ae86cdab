"""Registry of every statistic that can be reported for a transfer.

The order of FIELD_SPECS is fixed and determines dispatch order.
"""

from types import MappingProxyType

from transferstats.core.models import Extraction, FieldSpec, MetricKind

_GAUGE = Extraction.GAUGE
_SPEED = Extraction.SPEED
_COUNT = Extraction.INTEGER_COUNT

_DURATION = MetricKind.DURATION
_BYTES = MetricKind.BYTES
_BITRATE = MetricKind.BITRATE
_COUNT_KIND = MetricKind.COUNT

FIELD_SPECS: tuple[FieldSpec, ...] = (
    FieldSpec("total_time", _GAUGE, _DURATION, "TOTAL_TIME"),
    FieldSpec("namelookup_time", _GAUGE, _DURATION, "NAMELOOKUP_TIME"),
    FieldSpec("connect_time", _GAUGE, _DURATION, "CONNECT_TIME"),
    FieldSpec("pretransfer_time", _GAUGE, _DURATION, "PRETRANSFER_TIME"),
    FieldSpec("size_upload", _GAUGE, _BYTES, "SIZE_UPLOAD"),
    FieldSpec("size_download", _GAUGE, _BYTES, "SIZE_DOWNLOAD"),
    FieldSpec("speed_download", _SPEED, _BITRATE, "SPEED_DOWNLOAD"),
    FieldSpec("speed_upload", _SPEED, _BITRATE, "SPEED_UPLOAD"),
    FieldSpec("header_size", _COUNT, _BYTES, "HEADER_SIZE"),
    FieldSpec("request_size", _COUNT, _BYTES, "REQUEST_SIZE"),
    FieldSpec("content_length_download", _GAUGE, _BYTES, "CONTENT_LENGTH_DOWNLOAD"),
    FieldSpec("content_length_upload", _GAUGE, _BYTES, "CONTENT_LENGTH_UPLOAD"),
    FieldSpec("starttransfer_time", _GAUGE, _DURATION, "STARTTRANSFER_TIME"),
    FieldSpec("redirect_time", _GAUGE, _DURATION, "REDIRECT_TIME"),
    FieldSpec("redirect_count", _COUNT, _COUNT_KIND, "REDIRECT_COUNT"),
    FieldSpec("num_connects", _COUNT, _COUNT_KIND, "NUM_CONNECTS"),
    FieldSpec("appconnect_time", _GAUGE, _DURATION, "APPCONNECT_TIME"),
)

# Lower-cased name -> spec, built once
_BY_NAME = MappingProxyType({spec.name.lower(): spec for spec in FIELD_SPECS})


def lookup(name: str) -> FieldSpec | None:
    """Find a field by name, ignoring case.

    Args:
        name: Field name as written in configuration.

    Returns:
        The matching FieldSpec, or None if the name is not in the registry.
    """
    return _BY_NAME.get(name.lower())


def field_names() -> tuple[str, ...]:
    """Return all field names in dispatch order."""
    return tuple(spec.name for spec in FIELD_SPECS)
