"""
Snapshot comparison tests

Exercises the full expected-vs-actual walk over cgroup statistics snapshots
loaded from YAML fixtures and built in code.
"""

from .stats_factory import StatsFactory

__all__ = [
    "StatsFactory",
]
