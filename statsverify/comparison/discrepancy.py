"""Discrepancy records produced by the statistics comparators."""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class DiscrepancyKind(Enum):
    """Kinds of discrepancy a comparator can report."""

    VALUE_MISMATCH = "value_mismatch"
    LENGTH_MISMATCH = "length_mismatch"
    MISSING_KEY = "missing_key"


@dataclass
class Discrepancy:
    """
    One place where the expected and actual snapshots differ.

    Attributes:
        category: Statistics category ("blkio", "cpu", "hugetlb", "memory")
        field: Dotted path of the differing field inside the category
        expected: Expected value (whole record, sequence or scalar)
        actual: Actual value; None for a missing key
        message: Human-readable diagnostic line
        kind: What sort of difference this is
        index: Position inside an entry sequence, for positional mismatches
    """

    category: str
    field: str
    expected: Any
    actual: Any
    message: str
    kind: DiscrepancyKind = DiscrepancyKind.VALUE_MISMATCH
    index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["kind"] = self.kind.value
        return data
