"""Structural comparison of cgroup statistics snapshots."""

from statsverify.comparison.discrepancy import Discrepancy, DiscrepancyKind
from statsverify.comparison.sink import DiagnosticsSink
from statsverify.comparison.expectations import (
    expect_blkio_stats_equals,
    expect_hugetlb_stat_equals,
    expect_memory_stat_equals,
    expect_stats_equals,
    expect_throttling_data_equals,
)
from statsverify.comparison.diff_reporter import DiffReporter

__all__ = [
    "DiagnosticsSink",
    "DiffReporter",
    "Discrepancy",
    "DiscrepancyKind",
    "expect_blkio_stats_equals",
    "expect_hugetlb_stat_equals",
    "expect_memory_stat_equals",
    "expect_stats_equals",
    "expect_throttling_data_equals",
]
