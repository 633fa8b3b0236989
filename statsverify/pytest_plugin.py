"""
pytest integration for statsverify.

Provides the ``stats_sink`` fixture. A test hands the sink to the expect_*
functions and keeps running after mismatches; once the test body finishes,
a sink that recorded any failure turns the test's call phase into a failure
whose report lists every discrepancy.

Enable with ``pytest_plugins = ["statsverify.pytest_plugin"]`` in the root
conftest.py.
"""

import pytest

from statsverify.comparison.diff_reporter import DiffReporter
from statsverify.comparison.sink import DiagnosticsSink
from statsverify.config.settings import Settings

SINK_KEY = pytest.StashKey[DiagnosticsSink]()


def check_sink(sink: DiagnosticsSink) -> None:
    """Fail the current test immediately if the sink recorded a failure."""
    if sink.failed:
        pytest.fail(sink.summary(), pytrace=False)


@pytest.fixture
def stats_sink(request):
    """Diagnostics sink owned by the requesting test."""
    sink = DiagnosticsSink(name=request.node.nodeid)
    request.node.stash[SINK_KEY] = sink
    yield sink

    if sink.failed:
        settings = Settings()
        if settings.is_report_writing_enabled():
            DiffReporter(settings.report_dir).write_reports(sink)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.passed:
        return

    sink = item.stash.get(SINK_KEY, None)
    if sink is not None and sink.failed:
        report.outcome = "failed"
        report.longrepr = sink.summary()
