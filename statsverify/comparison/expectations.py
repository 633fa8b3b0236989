"""
Category entry points for comparing cgroup statistics snapshots.

Each expect_* function runs every comparator relevant to its category in a
fixed order and reports all discrepancies to the given sink. None of them
returns a verdict; callers read sink.failed once the walk is complete.
"""

from typing import Iterable

from statsverify.comparison.comparators import (
    compare_blkio_stat_entries,
    compare_hugetlb_stats,
    compare_memory_data,
    compare_memory_stat_mapping,
    compare_page_usage_by_numa,
    compare_throttling_data,
)
from statsverify.comparison.discrepancy import Discrepancy, DiscrepancyKind
from statsverify.comparison.sink import DiagnosticsSink
from statsverify.domain.stats import (
    BLKIO_FIELDS,
    BlkioStats,
    CgroupStats,
    HugetlbStats,
    MemoryStats,
    ThrottlingData,
)
from statsverify.utils.logger import log_operation

MEMORY_USAGE_RECORDS = (
    ("usage", "memory"),
    ("swap_usage", "swap memory"),
    ("kernel_usage", "kernel memory"),
)


def _report_all(sink: DiagnosticsSink, discrepancies: Iterable[Discrepancy]) -> None:
    for discrepancy in discrepancies:
        sink.report(discrepancy)


def expect_blkio_stats_equals(
    sink: DiagnosticsSink, expected: BlkioStats, actual: BlkioStats
) -> None:
    """Compare all eight blkio entry sequences."""
    for field in BLKIO_FIELDS:
        _report_all(
            sink,
            compare_blkio_stat_entries(field, getattr(expected, field), getattr(actual, field)),
        )


def expect_throttling_data_equals(
    sink: DiagnosticsSink, expected: ThrottlingData, actual: ThrottlingData
) -> None:
    _report_all(sink, compare_throttling_data(expected, actual))


def expect_hugetlb_stat_equals(
    sink: DiagnosticsSink, expected: HugetlbStats, actual: HugetlbStats, page_size: str = ""
) -> None:
    _report_all(sink, compare_hugetlb_stats(expected, actual, page_size))


def expect_memory_stat_equals(
    sink: DiagnosticsSink, expected: MemoryStats, actual: MemoryStats
) -> None:
    """
    Compare memory statistics.

    Order: usage, swap_usage and kernel_usage records, the NUMA page
    breakdown, use_hierarchy, then the memory.stat counters.
    """
    for field, label in MEMORY_USAGE_RECORDS:
        _report_all(
            sink,
            compare_memory_data(field, label, getattr(expected, field), getattr(actual, field)),
        )

    _report_all(
        sink, compare_page_usage_by_numa(expected.page_usage_by_numa, actual.page_usage_by_numa)
    )

    if expected.use_hierarchy != actual.use_hierarchy:
        sink.report(
            Discrepancy(
                category="memory",
                field="use_hierarchy",
                expected=expected.use_hierarchy,
                actual=actual.use_hierarchy,
                message=(
                    f"Expected memory use hierarchy {expected.use_hierarchy}, "
                    f"but found {actual.use_hierarchy}"
                ),
            )
        )

    _report_all(sink, compare_memory_stat_mapping(expected.stats, actual.stats))


@log_operation("compare_cgroup_stats")
def expect_stats_equals(sink: DiagnosticsSink, expected: CgroupStats, actual: CgroupStats) -> None:
    """
    Compare a full cgroup snapshot: blkio, CPU throttling, hugetlb, memory.

    Huge-page stats are checked for every page size present in expected; a
    page size absent from actual is reported as a missing key. Page sizes
    only present in actual are not inspected.
    """
    expect_blkio_stats_equals(sink, expected.blkio_stats, actual.blkio_stats)
    expect_throttling_data_equals(sink, expected.throttling_data, actual.throttling_data)

    for page_size, exp_hugetlb in expected.hugetlb_stats.items():
        if page_size not in actual.hugetlb_stats:
            sink.report(
                Discrepancy(
                    category="hugetlb",
                    field=page_size,
                    expected=exp_hugetlb,
                    actual=None,
                    message=f"Expected hugetlb stats for page size {page_size} not found",
                    kind=DiscrepancyKind.MISSING_KEY,
                )
            )
            continue
        expect_hugetlb_stat_equals(
            sink, exp_hugetlb, actual.hugetlb_stats[page_size], page_size=page_size
        )

    expect_memory_stat_equals(sink, expected.memory_stats, actual.memory_stats)
