"""
Unit tests for category entry points (statsverify/comparison/expectations.py)

Tests covering:
- Zero discrepancies for identical snapshots
- Full coverage: every sub-field is visited after earlier mismatches
- Fixed reporting order inside the memory category
- Aggregate snapshot walk including per-page-size hugetlb stats
- Diagnostic lines logged before the sink is marked failed
"""

import json
import logging

import pytest

from statsverify.comparison.discrepancy import DiscrepancyKind
from statsverify.comparison.expectations import (
    expect_blkio_stats_equals,
    expect_hugetlb_stat_equals,
    expect_memory_stat_equals,
    expect_stats_equals,
    expect_throttling_data_equals,
)
from statsverify.comparison.sink import DiagnosticsSink
from statsverify.domain.stats import BLKIO_FIELDS, BlkioStatEntry, HugetlbStats, PageStats
from tests.comparison.stats_factory import StatsFactory


@pytest.fixture
def factory():
    return StatsFactory()


@pytest.fixture
def sink():
    return DiagnosticsSink(name="unit")


class TestExpectBlkioStatsEquals:
    """Tests for the blkio entry point."""

    def test_identical_stats_pass(self, factory, sink):
        expect_blkio_stats_equals(sink, factory.build_blkio_stats(), factory.build_blkio_stats())

        assert sink.passed
        assert sink.discrepancies == []

    def test_three_entry_sequence_differing_at_index_one(self, factory, sink):
        expected = factory.build_blkio_stats()
        actual = factory.build_blkio_stats()
        actual.io_service_bytes_recursive[1] = BlkioStatEntry(major=8, minor=1, op="Read", value=1)

        expect_blkio_stats_equals(sink, expected, actual)

        assert sink.failed
        assert len(sink.discrepancies) == 1
        assert sink.discrepancies[0].index == 1
        assert sink.discrepancies[0].field == "io_service_bytes_recursive[1]"

    def test_length_mismatch_does_not_stop_other_sequences(self, factory, sink):
        expected = factory.build_blkio_stats()
        actual = factory.build_blkio_stats()
        actual.io_serviced_recursive.pop()
        actual.sectors_recursive[0] = BlkioStatEntry(major=8, minor=0, op="", value=17)

        expect_blkio_stats_equals(sink, expected, actual)

        assert [(d.field, d.kind) for d in sink.discrepancies] == [
            ("io_serviced_recursive", DiscrepancyKind.LENGTH_MISMATCH),
            ("sectors_recursive[0]", DiscrepancyKind.VALUE_MISMATCH),
        ]

    def test_every_sequence_is_visited(self, factory, sink):
        expected = factory.build_blkio_stats()
        actual = factory.build_blkio_stats()
        for name in BLKIO_FIELDS:
            getattr(actual, name).append(BlkioStatEntry())

        expect_blkio_stats_equals(sink, expected, actual)

        assert [d.field for d in sink.discrepancies] == list(BLKIO_FIELDS)


class TestExpectScalarCategories:
    """Tests for throttling and hugetlb entry points."""

    def test_throttling_data(self, factory, sink):
        actual = factory.build_throttling_data()
        actual.throttled_periods += 1

        expect_throttling_data_equals(sink, factory.build_throttling_data(), actual)

        assert len(sink.discrepancies) == 1
        assert sink.discrepancies[0].category == "cpu"

    def test_hugetlb_stats(self, factory, sink):
        expect_hugetlb_stat_equals(sink, factory.build_hugetlb_stats(), HugetlbStats())

        assert len(sink.discrepancies) == 1
        assert sink.discrepancies[0].category == "hugetlb"

    def test_hugetlb_equal(self, factory, sink):
        expect_hugetlb_stat_equals(sink, factory.build_hugetlb_stats(), factory.build_hugetlb_stats())

        assert sink.passed


class TestExpectMemoryStatEquals:
    """Tests for the memory entry point."""

    def test_identical_memory_stats(self, factory, sink):
        expect_memory_stat_equals(sink, factory.build_memory_stats(), factory.build_memory_stats())

        assert sink.passed

    def test_usage_limit_end_to_end(self, factory, sink):
        expected = factory.build_memory_stats()
        actual = factory.build_memory_stats()
        expected.usage.limit = 1000
        actual.usage.limit = 2000

        expect_memory_stat_equals(sink, expected, actual)

        assert sink.failed
        assert sink.messages == ["Expected memory limit 1000 but found 2000"]

    def test_use_hierarchy_mismatch(self, factory, sink):
        actual = factory.build_memory_stats()
        actual.use_hierarchy = False

        expect_memory_stat_equals(sink, factory.build_memory_stats(), actual)

        assert sink.messages == ["Expected memory use hierarchy True, but found False"]

    def test_reports_in_fixed_order_after_every_mismatch(self, factory, sink):
        expected = factory.build_memory_stats()
        actual = factory.build_memory_stats()
        actual.usage.failcnt = 0
        actual.swap_usage.usage = 0
        actual.kernel_usage.max_usage = 0
        actual.page_usage_by_numa.hierarchical.file = PageStats()
        actual.use_hierarchy = False
        del actual.stats["rss"]

        expect_memory_stat_equals(sink, expected, actual)

        assert [d.field for d in sink.discrepancies] == [
            "usage.failcnt",
            "swap_usage.usage",
            "kernel_usage.max_usage",
            "page_usage_by_numa.hierarchical.file",
            "use_hierarchy",
            "stats[rss]",
        ]

    def test_extra_memory_stat_keys_pass(self, factory, sink):
        actual = factory.build_memory_stats()
        actual.stats["pgfault"] = 42

        expect_memory_stat_equals(sink, factory.build_memory_stats(), actual)

        assert sink.passed


class TestExpectStatsEquals:
    """Tests for the aggregate snapshot entry point."""

    def test_identical_snapshots(self, factory, sink):
        expect_stats_equals(sink, factory.build_cgroup_stats(), factory.build_cgroup_stats())

        assert sink.passed
        assert sink.discrepancies == []

    def test_one_discrepancy_per_category(self, factory, sink):
        expected = factory.build_cgroup_stats()
        actual = factory.build_cgroup_stats()
        actual.blkio_stats.io_queued_recursive = []
        actual.throttling_data.periods = 1
        actual.hugetlb_stats["2MB"].usage = 1
        actual.memory_stats.kernel_usage.limit = 1

        expect_stats_equals(sink, expected, actual)

        assert [d.category for d in sink.discrepancies] == ["blkio", "cpu", "hugetlb", "memory"]

    def test_missing_page_size(self, factory, sink):
        expected = factory.build_cgroup_stats()
        expected.hugetlb_stats["1GB"] = HugetlbStats()
        actual = factory.build_cgroup_stats()

        expect_stats_equals(sink, expected, actual)

        assert len(sink.discrepancies) == 1
        assert sink.discrepancies[0].kind is DiscrepancyKind.MISSING_KEY
        assert sink.discrepancies[0].message == "Expected hugetlb stats for page size 1GB not found"

    def test_extra_page_size_in_actual_passes(self, factory, sink):
        actual = factory.build_cgroup_stats()
        actual.hugetlb_stats["1GB"] = HugetlbStats(usage=1)

        expect_stats_equals(sink, factory.build_cgroup_stats(), actual)

        assert sink.passed

    def test_operands_are_not_mutated(self, factory, sink):
        expected = factory.build_cgroup_stats()
        actual = factory.build_cgroup_stats()
        actual.memory_stats.stats = {}
        before = (expected.to_dict(), actual.to_dict())

        expect_stats_equals(sink, expected, actual)

        assert (expected.to_dict(), actual.to_dict()) == before

    def test_returns_no_verdict(self, factory, sink):
        result = expect_stats_equals(sink, factory.build_cgroup_stats(), factory.build_cgroup_stats())

        assert result is None


class TestDiagnosticLogging:
    """Discrepancies are logged as readable lines inside the JSON envelope."""

    def test_each_discrepancy_is_logged(self, factory, sink, caplog):
        expected = factory.build_memory_stats()
        actual = factory.build_memory_stats()
        expected.usage.limit = 1000
        actual.usage.limit = 2000

        with caplog.at_level(logging.DEBUG, logger="statsverify"):
            expect_memory_stat_equals(sink, expected, actual)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        entry = json.loads(warnings[0].getMessage())
        assert entry["message"] == "Expected memory limit 1000 but found 2000"
        assert entry["operation"] == "stats_comparison"
        assert entry["context"]["field"] == "usage.limit"
        assert entry["context"]["kind"] == "value_mismatch"

    def test_aggregate_walk_logs_operation_timing(self, factory, sink, caplog):
        with caplog.at_level(logging.DEBUG, logger="statsverify"):
            expect_stats_equals(sink, factory.build_cgroup_stats(), factory.build_cgroup_stats())

        messages = [json.loads(r.getMessage())["message"] for r in caplog.records]
        assert "Starting compare_cgroup_stats" in messages
        assert "Completed compare_cgroup_stats" in messages
