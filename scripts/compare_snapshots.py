#!/usr/bin/env python3
"""
Compare two cgroup statistics snapshot files.

Usage:
    python scripts/compare_snapshots.py expected.yaml actual.yaml
    python scripts/compare_snapshots.py expected.yaml actual.yaml --report-dir out/

Output:
    Every discrepancy found across blkio, CPU throttling, hugetlb and memory
    statistics, followed by a summary. Exits 1 if any discrepancy was found and
    2 if the configuration or either snapshot could not be loaded.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from statsverify.comparison.diff_reporter import DiffReporter
from statsverify.comparison.expectations import expect_stats_equals
from statsverify.comparison.sink import DiagnosticsSink
from statsverify.config.settings import ConfigurationError, Settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compare two cgroup stats snapshots")
    parser.add_argument("expected", help="Path to the expected snapshot YAML")
    parser.add_argument("actual", help="Path to the actual snapshot YAML")
    parser.add_argument("--schema", default=None, help="Alternative snapshot schema JSON")
    parser.add_argument(
        "--report-dir", default=None, help="Write JSON/Markdown reports to this directory"
    )
    parser.add_argument("--name", default=None, help="Report name (default: actual file stem)")
    return parser


def print_summary(sink: DiagnosticsSink) -> None:
    """Print discrepancy summary."""
    print("\n" + "=" * 80)
    print("STATS COMPARISON SUMMARY")
    print("=" * 80)

    if sink.passed:
        print("\nAll fields match")
    else:
        print(f"\nDiscrepancies: {len(sink.discrepancies)}")
        print("\n" + "-" * 80)
        for idx, discrepancy in enumerate(sink.discrepancies, 1):
            print(f"[{idx}] {discrepancy.category}/{discrepancy.field}: {discrepancy.message}")

    print("\n" + "=" * 80)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    settings.setup_logging()

    try:
        expected = settings.load_snapshot(args.expected, args.schema)
        actual = settings.load_snapshot(args.actual, args.schema)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load snapshots: {e}")
        return 2

    sink = DiagnosticsSink(name=args.name or Path(args.actual).stem)
    expect_stats_equals(sink, expected, actual)
    print_summary(sink)

    if args.report_dir:
        DiffReporter(Path(args.report_dir)).write_reports(sink)

    return 1 if sink.failed else 0


if __name__ == "__main__":
    sys.exit(main())
