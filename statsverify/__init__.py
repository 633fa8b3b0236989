"""
statsverify - structural comparison of cgroup statistics snapshots.

Walks expected and actual resource-accounting snapshots field by field and
reports every discrepancy to a shared sink instead of stopping at the first.
"""

__version__ = "1.0.0"
