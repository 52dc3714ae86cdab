"""Step definitions for dispatch BDD scenarios."""

from dataclasses import dataclass, field, replace

import pytest
from pytest_bdd import given, parsers, then, when

from tests.fakes import FakeTransferInfo
from transferstats.adapters.sinks import InMemoryMetricSink, SinkDefaults
from transferstats.core.dispatch import dispatch
from transferstats.core.errors import ConfigError, DispatchError
from transferstats.core.models import IdentityMetadata
from transferstats.core.selection import Selection, build_selection


@dataclass
class DispatchScenarioContext:
    """Shared state between steps in a dispatch scenario."""

    selection: Selection | None = None
    config_error: ConfigError | None = None
    identity: IdentityMetadata = field(default_factory=IdentityMetadata)
    source: FakeTransferInfo | None = None
    sink: InMemoryMetricSink = field(
        default_factory=lambda: InMemoryMetricSink(SinkDefaults(host="test"))
    )
    error: DispatchError | None = None


@pytest.fixture
def ctx() -> DispatchScenarioContext:
    """Fresh scenario context for each test."""
    return DispatchScenarioContext()


def _parse_pairs(text: str) -> list[tuple[str, str]]:
    """Split 'a=1, b=2' into [("a", "1"), ("b", "2")]."""
    pairs = []
    for item in text.split(","):
        key, _, value = item.strip().partition("=")
        pairs.append((key, value))
    return pairs


# === Given ===


@given(parsers.parse('statistics configured with "{config}"'))
def step_configured(ctx: DispatchScenarioContext, config: str) -> None:
    try:
        ctx.selection = build_selection(_parse_pairs(config))
    except ConfigError as e:
        ctx.config_error = e


@given("statistics are not configured")
def step_not_configured(ctx: DispatchScenarioContext) -> None:
    ctx.selection = None


@given(parsers.parse('a type instance prefix "{prefix}"'))
def step_prefix(ctx: DispatchScenarioContext, prefix: str) -> None:
    ctx.identity = replace(ctx.identity, type_instance_prefix=prefix)


@given(parsers.parse('a completed transfer reporting "{values}"'))
def step_transfer(ctx: DispatchScenarioContext, values: str) -> None:
    ctx.source = FakeTransferInfo(
        {
            key: float(raw) if "." in raw else int(raw)
            for key, raw in _parse_pairs(values)
        }
    )


@given("no completed transfer is available")
def step_no_transfer(ctx: DispatchScenarioContext) -> None:
    ctx.source = None


@given(parsers.parse('querying "{info_key}" fails'))
def step_query_fails(ctx: DispatchScenarioContext, info_key: str) -> None:
    assert ctx.source is not None
    ctx.source.fail_on.add(info_key)


# === When ===


@when("the statistics are dispatched")
def step_dispatch(ctx: DispatchScenarioContext) -> None:
    try:
        dispatch(ctx.selection, ctx.source, ctx.identity, ctx.sink)
    except DispatchError as e:
        ctx.error = e


# === Then ===


@then("the dispatch succeeds")
def step_succeeds(ctx: DispatchScenarioContext) -> None:
    assert ctx.error is None


@then(parsers.parse('the dispatch fails with "{error}"'))
def step_fails(ctx: DispatchScenarioContext, error: str) -> None:
    assert type(ctx.error).__name__ == error


@then(parsers.parse('the configuration fails with "{error}"'))
def step_config_fails(ctx: DispatchScenarioContext, error: str) -> None:
    assert ctx.selection is None
    assert type(ctx.config_error).__name__ == error


@then(parsers.parse("the sink receives {count:d} record(s)"))
def step_record_count(ctx: DispatchScenarioContext, count: int) -> None:
    assert len(ctx.sink) == count


@then(
    parsers.parse(
        'record {index:d} is "{kind}" "{type_instance}" with value {value:f}'
    )
)
def step_record(
    ctx: DispatchScenarioContext,
    index: int,
    kind: str,
    type_instance: str,
    value: float,
) -> None:
    record = ctx.sink.records()[index - 1]
    assert record.type == kind
    assert record.type_instance == type_instance
    assert record.value == pytest.approx(value)


@then(parsers.parse('"{info_key}" was never queried'))
def step_never_queried(ctx: DispatchScenarioContext, info_key: str) -> None:
    assert ctx.source is not None
    assert info_key not in ctx.source.queried
