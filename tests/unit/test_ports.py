"""Tests for port interfaces."""

import pytest

from tests.fakes import FakeTransferInfo, RejectingSink
from transferstats.core.models import MetricRecord
from transferstats.core.ports import MetricSink, TransferInfoSource


class TestTransferInfoSource:
    """Tests for TransferInfoSource protocol."""

    @pytest.mark.core
    def test_protocol_has_get_info_method(self) -> None:
        """TransferInfoSource must define get_info(info_key) -> float | int."""
        assert hasattr(TransferInfoSource, "get_info")

    @pytest.mark.core
    def test_class_implementing_protocol_is_recognized(self) -> None:
        """A class with get_info should satisfy TransferInfoSource."""
        source: TransferInfoSource = FakeTransferInfo()
        assert isinstance(source, TransferInfoSource)

    @pytest.mark.core
    def test_object_without_get_info_is_rejected(self) -> None:
        assert not isinstance(object(), TransferInfoSource)


class TestMetricSink:
    """Tests for MetricSink protocol."""

    @pytest.mark.core
    def test_protocol_has_write_method(self) -> None:
        """MetricSink must define write(record: MetricRecord) -> None."""
        assert hasattr(MetricSink, "write")

    @pytest.mark.core
    def test_class_implementing_protocol_is_recognized(self) -> None:
        """A class with a write method should satisfy MetricSink."""

        class FakeSink:
            def write(self, record: MetricRecord) -> None:
                pass

        sink: MetricSink = FakeSink()
        assert isinstance(sink, MetricSink)
        assert isinstance(RejectingSink(), MetricSink)
