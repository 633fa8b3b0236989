"""
Unit tests for the snapshot comparison script (scripts/compare_snapshots.py)
"""

import json
from pathlib import Path

from scripts.compare_snapshots import main

FIXTURES_DIR = Path(__file__).resolve().parents[1] / "fixtures"
FULL = str(FIXTURES_DIR / "snapshot_full.yaml")
DRIFTED = str(FIXTURES_DIR / "snapshot_drifted.yaml")


class TestCompareSnapshotsScript:
    """Tests for the command line entry point."""

    def test_identical_snapshots_exit_zero(self, capsys):
        assert main([FULL, FULL]) == 0
        assert "All fields match" in capsys.readouterr().out

    def test_drifted_snapshot_exits_one(self, capsys):
        assert main([FULL, DRIFTED]) == 1

        out = capsys.readouterr().out
        assert "Discrepancies: 4" in out
        assert "[3] memory/usage.limit: Expected memory limit 8192 but found 16384" in out

    def test_writes_reports(self, tmp_path):
        report_dir = tmp_path / "reports"

        main([FULL, DRIFTED, "--report-dir", str(report_dir), "--name", "drift"])

        report = json.loads((report_dir / "drift.json").read_text(encoding="utf-8"))
        assert report["statistics"]["total_discrepancies"] == 4
        assert (report_dir / "drift.md").exists()

    def test_load_failure_exits_two(self, tmp_path):
        assert main([FULL, str(tmp_path / "absent.yaml")]) == 2

    def test_invalid_snapshot_exits_two(self):
        assert main([FULL, str(FIXTURES_DIR / "snapshot_invalid.yaml")]) == 2

    def test_invalid_log_level_exits_two(self, monkeypatch, capsys):
        monkeypatch.setenv("STATSVERIFY_LOG_LEVEL", "LOUD")

        assert main([FULL, FULL]) == 2
        assert "STATS COMPARISON SUMMARY" not in capsys.readouterr().out
