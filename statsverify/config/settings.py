"""
Configuration loader for statsverify

Reads runtime flags from the environment and loads expected/actual cgroup
statistics snapshots from YAML files validated against a JSON schema.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
import yaml

from statsverify.domain.stats import CgroupStats
from statsverify.utils.logger import LOG_LEVEL_ENV, resolve_log_level

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    pass


PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent / "snapshot.schema.json"
DEFAULT_REPORT_DIR = PROJECT_ROOT / "tests" / "comparison" / "results"


class Settings:
    """
    Runtime configuration for comparison runs.

    Environment variables:
        STATSVERIFY_LOG_LEVEL: Level for statsverify loggers (default DEBUG)
        STATSVERIFY_WRITE_REPORTS: "true" to write JSON/Markdown reports
        STATSVERIFY_REPORT_DIR: Directory for report artifacts
    """

    def __init__(self):
        self.log_level = os.getenv(LOG_LEVEL_ENV, "DEBUG").upper()
        try:
            resolve_log_level(self.log_level)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        self.write_reports = os.getenv("STATSVERIFY_WRITE_REPORTS", "false").lower() == "true"
        self.report_dir = Path(os.getenv("STATSVERIFY_REPORT_DIR", str(DEFAULT_REPORT_DIR)))
        self.snapshot_schema: Dict[str, Any] = {}

    def is_report_writing_enabled(self) -> bool:
        """Check if report artifacts should be written for failing sinks."""
        return self.write_reports

    def load_schema(self, schema_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load the snapshot JSON schema.

        Args:
            schema_path: Path to a schema file; defaults to the packaged schema

        Raises:
            FileNotFoundError: If the schema file is missing
            ValueError: If the schema file is not valid JSON
        """
        path = Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH
        try:
            with open(path, "r", encoding="utf-8") as f:
                self.snapshot_schema = json.load(f)
                logger.debug(f"Loaded snapshot schema from {path}")
        except FileNotFoundError:
            logger.error(f"Snapshot schema file not found: {path}")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in snapshot schema: {e}")
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
        return self.snapshot_schema

    def load_snapshot(self, snapshot_path: str, schema_path: Optional[str] = None) -> CgroupStats:
        """
        Load a cgroup statistics snapshot from YAML and validate it.

        Args:
            snapshot_path: Path to the snapshot YAML file
            schema_path: Optional path to an alternative schema

        Returns:
            CgroupStats built from the file; an empty file yields all defaults

        Raises:
            FileNotFoundError: If either file is missing
            ValueError: If YAML is malformed or the snapshot violates the schema
        """
        self.load_schema(schema_path)

        try:
            with open(snapshot_path, "r", encoding="utf-8") as f:
                snapshot = yaml.safe_load(f)
        except FileNotFoundError:
            logger.error(f"Snapshot file not found: {snapshot_path}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in snapshot: {e}")
            raise ValueError(f"Invalid YAML in {snapshot_path}: {e}") from e

        if snapshot is None:
            logger.warning(f"Empty snapshot: {snapshot_path}")
            return CgroupStats()

        try:
            jsonschema.validate(instance=snapshot, schema=self.snapshot_schema)
            logger.info(f"Snapshot {snapshot_path} validated against schema")
        except jsonschema.ValidationError as e:
            logger.error(f"Snapshot failed schema validation: {e.message}")
            raise ValueError(f"Snapshot validation failed: {e.message}") from e
        except jsonschema.SchemaError as e:
            logger.error(f"Snapshot schema is invalid: {e.message}")
            raise ValueError(f"Snapshot schema is invalid: {e.message}") from e

        return CgroupStats.from_dict(snapshot)

    def setup_logging(self, logger_instance: Optional[logging.Logger] = None) -> None:
        """
        Apply the configured level to the statsverify logger tree.

        Args:
            logger_instance: Logger to configure; defaults to the "statsverify" logger
        """
        target = logger_instance or logging.getLogger("statsverify")
        target.setLevel(self.log_level)
        for name in list(logging.root.manager.loggerDict):
            if name.startswith(f"{target.name}."):
                logging.getLogger(name).setLevel(self.log_level)


def load_snapshot(snapshot_path: str, schema_path: Optional[str] = None) -> CgroupStats:
    """Load and validate a snapshot with default settings."""
    return Settings().load_snapshot(snapshot_path, schema_path)
