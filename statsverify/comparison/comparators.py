"""
Per-category comparators for cgroup statistics.

Each comparator is a pure function returning the list of discrepancies it
found; an empty list means the inputs are equal. Dispatching and reporting
live in statsverify.comparison.expectations.
"""

from typing import Dict, List, Sequence

from statsverify.comparison.discrepancy import Discrepancy, DiscrepancyKind
from statsverify.domain.stats import (
    BlkioStatEntry,
    HugetlbStats,
    MemoryData,
    MEMORY_DATA_FIELDS,
    PAGE_USAGE_CLASSES,
    PageUsageByNUMA,
    ThrottlingData,
)


def compare_blkio_stat_entries(
    field: str,
    expected: Sequence[BlkioStatEntry],
    actual: Sequence[BlkioStatEntry],
) -> List[Discrepancy]:
    """
    Compare two blkio entry sequences position by position.

    A length difference yields a single discrepancy and skips the element
    comparison. Otherwise every differing index yields its own discrepancy.
    Entries are never reordered or matched up.

    Args:
        field: Name of the blkio stat (e.g. "io_serviced_recursive")
        expected: Expected entries
        actual: Actual entries

    Returns:
        List of discrepancies
    """
    prefix = f"blkio {field} do not match"

    if len(expected) != len(actual):
        return [
            Discrepancy(
                category="blkio",
                field=field,
                expected=len(expected),
                actual=len(actual),
                message=(
                    f"{prefix} - blkio stat entries length do not match: "
                    f"expected {len(expected)} but found {len(actual)}"
                ),
                kind=DiscrepancyKind.LENGTH_MISMATCH,
            )
        ]

    discrepancies: List[Discrepancy] = []
    for index, (exp_entry, act_entry) in enumerate(zip(expected, actual)):
        if exp_entry != act_entry:
            discrepancies.append(
                Discrepancy(
                    category="blkio",
                    field=f"{field}[{index}]",
                    expected=exp_entry,
                    actual=act_entry,
                    message=(
                        f"{prefix} - Expected blkio stat entry {exp_entry} "
                        f"at index {index} but found {act_entry}"
                    ),
                    index=index,
                )
            )
    return discrepancies


def compare_throttling_data(
    expected: ThrottlingData, actual: ThrottlingData
) -> List[Discrepancy]:
    """Whole-record comparison of CPU throttling counters."""
    if expected == actual:
        return []
    return [
        Discrepancy(
            category="cpu",
            field="throttling_data",
            expected=expected,
            actual=actual,
            message=f"Expected throttling data {expected} but found {actual}",
        )
    ]


def compare_hugetlb_stats(
    expected: HugetlbStats, actual: HugetlbStats, page_size: str = ""
) -> List[Discrepancy]:
    """Whole-record comparison of huge-page counters."""
    if expected == actual:
        return []
    label = f"hugetlb stats {page_size}" if page_size else "hugetlb stats"
    return [
        Discrepancy(
            category="hugetlb",
            field=page_size or "hugetlb_stats",
            expected=expected,
            actual=actual,
            message=f"Expected {label} {expected} but found {actual}",
        )
    ]


def compare_memory_data(
    field: str, label: str, expected: MemoryData, actual: MemoryData
) -> List[Discrepancy]:
    """
    Compare a memory usage record field by field.

    Args:
        field: Attribute name on MemoryStats ("usage", "swap_usage", "kernel_usage")
        label: Human-readable record name used in messages ("memory", "swap memory")
        expected: Expected record
        actual: Actual record

    Returns:
        One discrepancy per differing counter
    """
    discrepancies: List[Discrepancy] = []
    for name, description in MEMORY_DATA_FIELDS:
        exp_value = getattr(expected, name)
        act_value = getattr(actual, name)
        if exp_value != act_value:
            discrepancies.append(
                Discrepancy(
                    category="memory",
                    field=f"{field}.{name}",
                    expected=exp_value,
                    actual=act_value,
                    message=f"Expected {label} {description} {exp_value} but found {act_value}",
                )
            )
    return discrepancies


def compare_memory_stat_mapping(
    expected: Dict[str, int], actual: Dict[str, int]
) -> List[Discrepancy]:
    """
    Check that every expected memory.stat counter is present with the same value.

    Only the expected key set is validated; counters that appear only in
    actual are not inspected. A missing key is reported once as missing and
    is not also reported as a value mismatch.
    """
    discrepancies: List[Discrepancy] = []
    for key, exp_value in expected.items():
        if key not in actual:
            discrepancies.append(
                Discrepancy(
                    category="memory",
                    field=f"stats[{key}]",
                    expected=exp_value,
                    actual=None,
                    message=f"Expected memory stat key {key} not found",
                    kind=DiscrepancyKind.MISSING_KEY,
                )
            )
            continue

        act_value = actual[key]
        if exp_value != act_value:
            discrepancies.append(
                Discrepancy(
                    category="memory",
                    field=f"stats[{key}]",
                    expected=exp_value,
                    actual=act_value,
                    message=f"Expected memory stat {key} value {exp_value} but found {act_value}",
                )
            )
    return discrepancies


def compare_page_usage_by_numa(
    expected: PageUsageByNUMA, actual: PageUsageByNUMA
) -> List[Discrepancy]:
    """
    Compare the NUMA page breakdown as eight independent whole values.

    Checks total, file, anon and unevictable, then their hierarchical
    counterparts. Node order matters; there is no per-node diagnosis.
    """
    discrepancies: List[Discrepancy] = []
    for hierarchical in (False, True):
        exp_inner = expected.hierarchical if hierarchical else expected
        act_inner = actual.hierarchical if hierarchical else actual
        for usage_class in PAGE_USAGE_CLASSES:
            exp_value = getattr(exp_inner, usage_class)
            act_value = getattr(act_inner, usage_class)
            if exp_value == act_value:
                continue

            if hierarchical:
                field = f"page_usage_by_numa.hierarchical.{usage_class}"
                label = f"hierarchical {usage_class}"
            else:
                field = f"page_usage_by_numa.{usage_class}"
                label = usage_class
            discrepancies.append(
                Discrepancy(
                    category="memory",
                    field=field,
                    expected=exp_value,
                    actual=act_value,
                    message=(
                        f"Expected {label} page usage by NUMA {exp_value!r} "
                        f"but found {act_value!r}"
                    ),
                )
            )
    return discrepancies
