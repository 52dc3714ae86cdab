"""Exceptions raised while building selections and dispatching statistics."""


class TransferStatsError(Exception):
    """Base class for all transferstats errors."""


class ConfigError(TransferStatsError, ValueError):
    """Configuration could not be turned into a Selection."""


class UnknownFieldError(ConfigError):
    """Configuration names a field that is not in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown field name {name!r}")
        self.name = name


class InvalidValueError(ConfigError):
    """A field was given something other than a single boolean value."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name!r} expects a single boolean argument")
        self.name = name


class DispatchError(TransferStatsError, RuntimeError):
    """A dispatch call was aborted."""


class SourceUnavailableError(DispatchError):
    """Dispatch was called with a selection but without a transfer source."""

    def __init__(self) -> None:
        super().__init__("No transfer-info source available")


class QueryError(DispatchError):
    """The raw value of a field could not be retrieved from the source."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Failed to query {field!r} from transfer-info source")
        self.field = field


class EmitError(DispatchError):
    """The metric sink rejected the record of a field."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Metric sink rejected {field!r}")
        self.field = field


class InfoUnavailableError(LookupError):
    """A source knows the info key but cannot answer it for this transfer."""

    def __init__(self, info_key: str, reason: str = "") -> None:
        message = f"{info_key} is not available"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.info_key = info_key
