"""Shared defaults for metric sink adapters."""

import socket
from dataclasses import dataclass, field, replace

from transferstats.core.models import MetricRecord


@dataclass(frozen=True)
class SinkDefaults:
    """Identity values used when a record leaves them unset.

    Attributes:
        host: Default host name (default: this machine's host name).
        plugin: Default plugin name.
        plugin_instance: Default plugin instance.
    """

    host: str = field(default_factory=socket.gethostname)
    plugin: str = ""
    plugin_instance: str = ""


def _apply_defaults(record: MetricRecord, defaults: SinkDefaults) -> MetricRecord:
    """Fill the unset identity fields of record from defaults."""
    return replace(
        record,
        host=defaults.host if record.host is None else record.host,
        plugin=defaults.plugin if record.plugin is None else record.plugin,
        plugin_instance=(
            defaults.plugin_instance
            if record.plugin_instance is None
            else record.plugin_instance
        ),
    )
