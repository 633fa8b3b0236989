"""Diff Reporter - Generate structured comparison results and markdown summaries."""

from __future__ import annotations

import json
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Tuple

from statsverify.comparison.discrepancy import Discrepancy, DiscrepancyKind
from statsverify.comparison.sink import DiagnosticsSink

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_RESULTS_DIR = PROJECT_ROOT / "tests" / "comparison" / "results"


class DiffReporter:
    """Generate structured comparison artifacts (JSON + Markdown) for a sink."""

    def __init__(self, output_dir: Path | None = None) -> None:
        self.output_dir = Path(output_dir) if output_dir is not None else DEFAULT_RESULTS_DIR
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def summarize(self, sink: DiagnosticsSink) -> Dict[str, Any]:
        discrepancies = sink.discrepancies
        kinds = Counter(d.kind for d in discrepancies)
        categories = Counter(d.category for d in discrepancies)

        return {
            "name": sink.name,
            "total_discrepancies": len(discrepancies),
            "value_mismatches": kinds[DiscrepancyKind.VALUE_MISMATCH],
            "length_mismatches": kinds[DiscrepancyKind.LENGTH_MISMATCH],
            "missing_keys": kinds[DiscrepancyKind.MISSING_KEY],
            "by_category": dict(sorted(categories.items())),
            "status": "FAIL" if sink.failed else "PASS",
            "timestamp": datetime.now().isoformat(),
        }

    def generate_json_report(
        self,
        name: str,
        discrepancies: List[Discrepancy],
        stats: Dict[str, Any],
    ) -> str:
        report = {
            "metadata": {
                "name": name,
                "generated_at": datetime.now().isoformat(),
            },
            "statistics": stats,
            "discrepancies": [discrepancy.to_dict() for discrepancy in discrepancies],
        }

        return json.dumps(report, indent=2, default=str)

    def generate_markdown_summary(
        self,
        name: str,
        discrepancies: List[Discrepancy],
        stats: Dict[str, Any],
    ) -> str:
        md_lines = [
            f"# Stats Comparison Report: {name}",
            f"**Generated:** {datetime.now().isoformat()}",
            "",
            "## Summary",
            f"- **Total Discrepancies:** {stats['total_discrepancies']}",
            f"- **Value Mismatches:** {stats['value_mismatches']}",
            f"- **Length Mismatches:** {stats['length_mismatches']}",
            f"- **Missing Keys:** {stats['missing_keys']}",
            f"- **Status:** {stats['status']}",
            "",
        ]

        if discrepancies:
            md_lines.append("## Detailed Discrepancies")
            md_lines.append("")
            for discrepancy in discrepancies:
                md_lines.append(
                    f"- **{discrepancy.category.upper()}** {discrepancy.field}: "
                    f"{discrepancy.message}"
                )
        else:
            md_lines.append("All fields match")

        md_lines.extend(
            [
                "",
                "---",
                "*Generated by statsverify*",
            ]
        )

        return "\n".join(md_lines)

    def write_reports(self, sink: DiagnosticsSink) -> Tuple[Path, Path]:
        stats = self.summarize(sink)
        json_report = self.generate_json_report(sink.name, sink.discrepancies, stats)
        markdown_report = self.generate_markdown_summary(sink.name, sink.discrepancies, stats)

        safe_name = sink.name.replace("/", "_").replace("::", "__")
        json_path = self.output_dir / f"{safe_name}.json"
        md_path = self.output_dir / f"{safe_name}.md"

        json_path.write_text(json_report, encoding="utf-8")
        md_path.write_text(markdown_report, encoding="utf-8")

        logger.info("Wrote comparison reports for %s", sink.name)
        logger.info("  JSON: %s", json_path)
        logger.info("  Markdown: %s", md_path)

        return json_path, md_path
