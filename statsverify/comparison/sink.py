"""
Diagnostics sink shared by every comparator invoked during one test.

The sink accumulates discrepancies and carries a sticky failed flag; it is
the only place the pass/fail verdict lives. Reporting never raises, so a
single comparison call always walks the whole structure.
"""

from typing import Any, Dict, List

from statsverify.comparison.discrepancy import Discrepancy
from statsverify.utils.logger import get_logger


class DiagnosticsSink:
    """
    Accumulates discrepancies for one test case.

    Not safe for concurrent use; one sink belongs to one test.
    """

    def __init__(self, name: str = "stats"):
        """
        Args:
            name: Label for this sink, used in summaries and report file names
        """
        self.name = name
        self.logger = get_logger(__name__)
        self.discrepancies: List[Discrepancy] = []
        self._failed = False

    @property
    def failed(self) -> bool:
        return self._failed

    @property
    def passed(self) -> bool:
        return not self._failed

    @property
    def messages(self) -> List[str]:
        return [discrepancy.message for discrepancy in self.discrepancies]

    def report(self, discrepancy: Discrepancy) -> None:
        """
        Log a discrepancy, record it and mark the sink failed.

        Args:
            discrepancy: The difference to report
        """
        context: Dict[str, Any] = {
            "sink": self.name,
            "category": discrepancy.category,
            "field": discrepancy.field,
            "kind": discrepancy.kind.value,
        }
        if discrepancy.index is not None:
            context["index"] = discrepancy.index
        self.logger.warning(discrepancy.message, operation="stats_comparison", context=context)

        self.discrepancies.append(discrepancy)
        self.fail()

    def fail(self) -> None:
        """Mark the sink failed without recording a discrepancy."""
        self._failed = True

    def summary(self) -> str:
        """Return every diagnostic line, one per row, headed by a count."""
        if self.passed:
            return f"{self.name}: no discrepancies"
        lines = [f"{self.name}: {len(self.discrepancies)} discrepancies"]
        lines.extend(f"  - {message}" for message in self.messages)
        return "\n".join(lines)

    def reset(self) -> None:
        self.discrepancies = []
        self._failed = False
