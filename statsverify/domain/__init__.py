"""Domain models - cgroup statistics snapshot."""

from .stats import (
    BlkioStatEntry,
    BlkioStats,
    CgroupStats,
    HugetlbStats,
    MemoryData,
    MemoryStats,
    PageStats,
    PageUsageByNUMA,
    PageUsageByNUMAInner,
    ThrottlingData,
)

__all__ = [
    "BlkioStatEntry",
    "BlkioStats",
    "CgroupStats",
    "HugetlbStats",
    "MemoryData",
    "MemoryStats",
    "PageStats",
    "PageUsageByNUMA",
    "PageUsageByNUMAInner",
    "ThrottlingData",
]
