"""
Cgroup statistics domain model.

Represents one resource-accounting snapshot of a cgroup: block I/O,
CPU throttling, huge-page and memory counters (including the per-NUMA-node
page breakdown). Instances are plain data; the producer fills them in and
the comparison layer only reads them.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List


@dataclass
class BlkioStatEntry:
    """
    One block I/O accounting row.

    Attributes:
        major: Device major number
        minor: Device minor number
        op: Operation class ("Read", "Write", "Sync", "Async", "Total", ...)
        value: Counter value
    """

    major: int = 0
    minor: int = 0
    op: str = ""
    value: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BlkioStatEntry":
        return cls(
            major=data.get("major", 0),
            minor=data.get("minor", 0),
            op=data.get("op", ""),
            value=data.get("value", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


BLKIO_FIELDS = (
    "io_service_bytes_recursive",
    "io_serviced_recursive",
    "io_queued_recursive",
    "io_service_time_recursive",
    "io_wait_time_recursive",
    "io_merged_recursive",
    "io_time_recursive",
    "sectors_recursive",
)


@dataclass
class BlkioStats:
    """
    Block I/O statistics, one entry sequence per blkio stat file.

    Entry order follows the producer's iteration over devices and is part
    of the contract.
    """

    io_service_bytes_recursive: List[BlkioStatEntry] = field(default_factory=list)
    io_serviced_recursive: List[BlkioStatEntry] = field(default_factory=list)
    io_queued_recursive: List[BlkioStatEntry] = field(default_factory=list)
    io_service_time_recursive: List[BlkioStatEntry] = field(default_factory=list)
    io_wait_time_recursive: List[BlkioStatEntry] = field(default_factory=list)
    io_merged_recursive: List[BlkioStatEntry] = field(default_factory=list)
    io_time_recursive: List[BlkioStatEntry] = field(default_factory=list)
    sectors_recursive: List[BlkioStatEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BlkioStats":
        return cls(
            **{
                name: [BlkioStatEntry.from_dict(entry) for entry in data.get(name) or []]
                for name in BLKIO_FIELDS
            }
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ThrottlingData:
    """CFS throttling counters from cpu.stat."""

    periods: int = 0
    throttled_periods: int = 0
    throttled_time: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ThrottlingData":
        return cls(
            periods=data.get("periods", 0),
            throttled_periods=data.get("throttled_periods", 0),
            throttled_time=data.get("throttled_time", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class HugetlbStats:
    """Huge-page usage counters for a single page size."""

    usage: int = 0
    max_usage: int = 0
    failcnt: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HugetlbStats":
        return cls(
            usage=data.get("usage", 0),
            max_usage=data.get("max_usage", 0),
            failcnt=data.get("failcnt", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


MEMORY_DATA_FIELDS = (
    ("usage", "usage"),
    ("max_usage", "max usage"),
    ("failcnt", "failcnt"),
    ("limit", "limit"),
)


@dataclass
class MemoryData:
    """
    Usage record for one memory counter family (memory, swap or kernel).

    Attributes:
        usage: Current usage in bytes
        max_usage: Peak usage in bytes
        failcnt: Number of times the limit was hit
        limit: Configured limit in bytes
    """

    usage: int = 0
    max_usage: int = 0
    failcnt: int = 0
    limit: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemoryData":
        return cls(**{name: data.get(name, 0) for name, _ in MEMORY_DATA_FIELDS})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PageStats:
    """
    Page count for one usage class.

    Attributes:
        total: Page count summed over all nodes
        nodes: Per-node page counts, indexed by NUMA node number
    """

    total: int = 0
    nodes: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PageStats":
        return cls(total=data.get("total", 0), nodes=list(data.get("nodes") or []))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


PAGE_USAGE_CLASSES = ("total", "file", "anon", "unevictable")


@dataclass
class PageUsageByNUMAInner:
    """The four page usage classes reported by memory.numa_stat."""

    total: PageStats = field(default_factory=PageStats)
    file: PageStats = field(default_factory=PageStats)
    anon: PageStats = field(default_factory=PageStats)
    unevictable: PageStats = field(default_factory=PageStats)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PageUsageByNUMAInner":
        return cls(
            **{name: PageStats.from_dict(data.get(name) or {}) for name in PAGE_USAGE_CLASSES}
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PageUsageByNUMA(PageUsageByNUMAInner):
    """
    Per-NUMA page usage for the cgroup itself plus the hierarchical
    (subtree-aggregated) variant of the same four classes.
    """

    hierarchical: PageUsageByNUMAInner = field(default_factory=PageUsageByNUMAInner)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PageUsageByNUMA":
        inner = PageUsageByNUMAInner.from_dict(data)
        return cls(
            total=inner.total,
            file=inner.file,
            anon=inner.anon,
            unevictable=inner.unevictable,
            hierarchical=PageUsageByNUMAInner.from_dict(data.get("hierarchical") or {}),
        )


@dataclass
class MemoryStats:
    """
    Memory controller statistics.

    Attributes:
        usage: Memory usage record
        swap_usage: Memory+swap usage record
        kernel_usage: Kernel memory usage record
        page_usage_by_numa: Per-node page breakdown from memory.numa_stat
        use_hierarchy: Whether memory.use_hierarchy is enabled
        stats: Raw counters from memory.stat; the key set is open-ended
    """

    usage: MemoryData = field(default_factory=MemoryData)
    swap_usage: MemoryData = field(default_factory=MemoryData)
    kernel_usage: MemoryData = field(default_factory=MemoryData)
    page_usage_by_numa: PageUsageByNUMA = field(default_factory=PageUsageByNUMA)
    use_hierarchy: bool = False
    stats: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemoryStats":
        return cls(
            usage=MemoryData.from_dict(data.get("usage") or {}),
            swap_usage=MemoryData.from_dict(data.get("swap_usage") or {}),
            kernel_usage=MemoryData.from_dict(data.get("kernel_usage") or {}),
            page_usage_by_numa=PageUsageByNUMA.from_dict(data.get("page_usage_by_numa") or {}),
            use_hierarchy=data.get("use_hierarchy", False),
            stats=dict(data.get("stats") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CgroupStats:
    """
    Full statistics snapshot of one cgroup.

    Attributes:
        blkio_stats: Block I/O statistics
        throttling_data: CPU throttling counters
        hugetlb_stats: Huge-page statistics keyed by page size label ("2MB", "1GB")
        memory_stats: Memory statistics
    """

    blkio_stats: BlkioStats = field(default_factory=BlkioStats)
    throttling_data: ThrottlingData = field(default_factory=ThrottlingData)
    hugetlb_stats: Dict[str, HugetlbStats] = field(default_factory=dict)
    memory_stats: MemoryStats = field(default_factory=MemoryStats)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CgroupStats":
        """
        Create a snapshot from a plain dictionary (e.g. a parsed YAML fixture).

        Missing categories fall back to all-zero defaults.

        Args:
            data: Dictionary keyed by category name

        Returns:
            CgroupStats instance
        """
        return cls(
            blkio_stats=BlkioStats.from_dict(data.get("blkio_stats") or {}),
            throttling_data=ThrottlingData.from_dict(data.get("throttling_data") or {}),
            hugetlb_stats={
                str(page_size): HugetlbStats.from_dict(values or {})
                for page_size, values in (data.get("hugetlb_stats") or {}).items()
            },
            memory_stats=MemoryStats.from_dict(data.get("memory_stats") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
