"""Selection of which registry fields are reported.

A Selection is built once from configuration and never changes afterwards,
so it can be shared between threads dispatching different transfers.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from transferstats.core.errors import InvalidValueError, UnknownFieldError
from transferstats.core.models import FieldSpec
from transferstats.core.registry import FIELD_SPECS, lookup

logger = logging.getLogger(__name__)

ConfigValue = bool | str | list[bool | str] | tuple[bool | str, ...]

_TRUE_STRINGS = frozenset({"true", "yes", "on"})


def is_true(value: bool | str) -> bool:
    """Truthiness rule shared by every boolean option.

    Args:
        value: A bool, or a string such as "true", "Yes" or "off".

    Returns:
        True for True and for exactly "true", "yes" or "on" in any case.
        Surrounding whitespace is not ignored.
    """
    if isinstance(value, bool):
        return value
    return value.lower() in _TRUE_STRINGS


def _single_boolean(name: str, value: object) -> bool | str:
    """Unwrap a config value that must hold exactly one boolean-like item."""
    if isinstance(value, (list, tuple)):
        if len(value) != 1:
            raise InvalidValueError(name)
        value = value[0]
    if not isinstance(value, (bool, str)):
        raise InvalidValueError(name)
    return value


@dataclass(frozen=True)
class Selection:
    """Enabled state of every registry field.

    Attributes:
        enabled: Canonical names of the enabled fields. Every other
            registry field is disabled.
    """

    enabled: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        for name in self.enabled:
            spec = lookup(name)
            if spec is None or spec.name != name:
                raise UnknownFieldError(name)

    @classmethod
    def none(cls) -> "Selection":
        """Selection with every field disabled."""
        return cls()

    def is_enabled(self, name: str) -> bool:
        """Check whether a field is enabled. Unknown names are disabled."""
        spec = lookup(name)
        return spec is not None and spec.name in self.enabled

    def enabled_fields(self) -> tuple[FieldSpec, ...]:
        """Return the enabled FieldSpecs in registry order."""
        return tuple(spec for spec in FIELD_SPECS if spec.name in self.enabled)

    @property
    def flags(self) -> dict[str, bool]:
        """Map every registry field name to its enabled flag."""
        return {spec.name: spec.name in self.enabled for spec in FIELD_SPECS}


def build_selection(entries: Iterable[tuple[str, ConfigValue]]) -> Selection:
    """Build a Selection from (field name, value) configuration pairs.

    Construction is all-or-nothing: the first invalid entry aborts it.
    Later entries for the same field override earlier ones.

    Args:
        entries: Pairs of field name and a single boolean or boolean-like
            string, optionally wrapped in a one-item list or tuple.

    Returns:
        The Selection. Fields never mentioned are disabled.

    Raises:
        UnknownFieldError: A name is not in the registry.
        InvalidValueError: A value is not a single boolean-like item.
    """
    flags: dict[str, bool] = {}
    for name, value in entries:
        spec = lookup(name)
        if spec is None:
            logger.error("transfer stats: Unknown field name %s", name)
            raise UnknownFieldError(name)
        try:
            flags[spec.name] = is_true(_single_boolean(name, value))
        except InvalidValueError:
            logger.error("transfer stats: %s expects a single boolean argument", name)
            raise
    return Selection(frozenset(name for name, on in flags.items() if on))


def selection_from_config(
    config: Mapping[str, ConfigValue] | Iterable[tuple[str, ConfigValue]] | None,
) -> Selection | None:
    """Build a Selection from parsed configuration.

    Args:
        config: None when statistics are not configured, a mapping of field
            name to value, or an iterable of (name, value) pairs.

    Returns:
        None when config is None (statistics disabled), otherwise the
        Selection built by build_selection.
    """
    if config is None:
        return None
    if isinstance(config, Mapping):
        return build_selection(config.items())
    return build_selection(config)
