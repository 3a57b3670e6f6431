"""
result_handler.py

Turns the per-phase reports of pytest_runtest_makereport into one TestResult per test attempt.
"""

import base64
import logging
from pathlib import Path
from typing import Any, Optional

import pytest
from _pytest.nodes import Item
from _pytest.reports import TestReport
from _pytest.runner import CallInfo
from playwright.sync_api import Page

from html_reporter.report_handler import TestResult, save_test_result

logger = logging.getLogger(__name__)

MAX_SCREENSHOTS = 5
PHASES = ('setup', 'call', 'teardown')


class ResultHandler:
    """
    Handles the processing, tracking, and reporting of test results.

    State that has to survive between phases (status and timing of each attempt, number of
    screenshots taken by this worker) is kept on the pytest config.
    """

    def __init__(self, config: Any, report_dir: Path = Path('reports')) -> None:
        self.config = config
        self.report_dir = report_dir

        if not hasattr(self.config, '_aqa_test_status'):
            self.config._aqa_test_status = {}
        if not hasattr(self.config, '_aqa_test_timing'):
            self.config._aqa_test_timing = {}
        if not hasattr(self.config, 'screenshots_amount'):
            self.config.screenshots_amount = 0

    def process_test_result(self, item: Item, call: CallInfo, report: TestReport) -> None:
        """
        Process a test result from the pytest_runtest_makereport hook.

        Args:
            item: The pytest test item being run
            call: Information about the test function call
            report: The pytest report object
        """
        status_key, status = self._get_test_status(item)
        self._track_phase_timing(report, status_key)

        status[report.when] = report.outcome
        if report.outcome == 'failed' and call.excinfo:
            if call.excinfo.type not in (AssertionError, pytest.fail.Exception):
                status[report.when] = 'error'

        if report.when == 'call' and hasattr(report, 'wasxfail'):
            status['xfail_status'] = 'xfailed' if report.outcome != 'passed' else 'xpassed'
            status['xfail_reason'] = report.wasxfail

        if report.when == 'call' and hasattr(item, '_soft_assert'):
            self._process_soft_assertions(item, report, status)

        setattr(item, f'_report_{report.when}_{status["execution_count"]}', report)

        if self._is_test_complete(report, status) and not status['final_result_reported']:
            self._create_final_report(item, call, report, status, status_key)

    def _get_test_status(self, item: Item) -> tuple[str, dict[str, Any]]:
        """
        Get or create the status of this test attempt, keyed by nodeid and execution count.
        """
        execution_count = getattr(item, 'execution_count', 1)
        status_key = f'{item.nodeid}:{execution_count}'

        if not self.config._aqa_test_status.get(status_key):
            self.config._aqa_test_status[status_key] = {
                'setup': None,
                'call': None,
                'teardown': None,
                'final_result_reported': False,
                'execution_count': execution_count,
                'xfail_status': None
            }
        return status_key, self.config._aqa_test_status[status_key]

    def _track_phase_timing(self, report: TestReport, status_key: str) -> None:
        timing = self.config._aqa_test_timing.setdefault(status_key, {
            'start_time': None,
            'total_duration': 0.0,
            'phase_durations': {phase: 0.0 for phase in PHASES}
        })

        start = getattr(report, 'start', None)
        if start is not None and (timing['start_time'] is None or start < timing['start_time']):
            timing['start_time'] = start

        duration = getattr(report, 'duration', None)
        if duration is not None:
            timing['phase_durations'][report.when] = duration
            timing['total_duration'] += duration

    @staticmethod
    def _process_soft_assertions(item: Item, report: TestReport, status: dict[str, Any]) -> None:
        """
        Fail the call phase when soft assertions were recorded, keeping every failure in the report.
        A hard failure of the same test keeps its traceback; the soft failures are appended.
        """
        soft_assert = item._soft_assert
        if not soft_assert.has_failures():
            return

        failures = soft_assert.get_failures()
        message = f'Soft assert failures ({len(failures)}):\n' + '\n'.join(failures)

        if hasattr(report, 'wasxfail'):
            status['xfail_status'] = 'xfailed'
            report.outcome = 'skipped'  # pytest reports xfailed tests as skipped
            return

        if report.outcome == 'failed':
            report.sections.append(('Soft assert failures', message))
        else:
            report.outcome = 'failed'
            report.longrepr = message
            status['call'] = 'failed'

    @staticmethod
    def _is_test_complete(report: TestReport, status: dict[str, Any]) -> bool:
        """
        A test attempt is complete after teardown, a failed setup, or a failed call.
        """
        return (
                report.when == 'teardown' or
                (report.when == 'setup' and report.outcome != 'passed') or
                (report.when == 'call' and status['setup'] == 'passed' and report.outcome != 'passed')
        )

    def _create_final_report(self, item: Item, call: CallInfo, report: TestReport, status: dict[str, Any],
                             status_key: str) -> None:
        status['final_result_reported'] = True

        outcome, error_phase = self._determine_outcome(report, status)

        result = TestResult(item, outcome, getattr(report, 'duration', 0), {},
                            timestamp=getattr(report, 'start', None) or 0)
        result.error_phase = error_phase

        timing = self.config._aqa_test_timing.get(status_key, {})
        if timing.get('start_time') is not None:
            result.timestamp = timing['start_time']
        if timing.get('phase_durations'):
            result.phase_durations = timing['phase_durations']
            result.duration = timing['total_duration']

        if status.get('xfail_reason'):
            result.wasxfail = status['xfail_reason']
        elif report.outcome == 'skipped' and isinstance(report.longrepr, tuple):
            result.skip_reason = report.longrepr[-1].replace('Skipped: ', '')

        max_reruns = getattr(self.config.option, 'reruns', 0) or 0
        if status['execution_count'] <= max_reruns and outcome in ('failed', 'error'):
            result.outcome = 'rerun'

        if result.outcome in ('failed', 'error', 'xfailed', 'rerun'):
            self._process_error_info(item, report, result)

        self._collect_logs(item, result, status)

        self.report_dir.mkdir(parents=True, exist_ok=True)
        save_test_result(result, self.report_dir)

    @staticmethod
    def _determine_outcome(report: TestReport, status: dict[str, Any]) -> tuple[str, Optional[str]]:
        """
        Combine the phase outcomes into the outcome of the attempt and the phase that failed.
        """
        if status['xfail_status']:
            return status['xfail_status'], 'call'

        for phase in PHASES:
            if status[phase] in ('failed', 'error'):
                return status[phase], phase

        if status['call'] == 'passed':
            return 'passed', None
        if status['call'] == 'skipped' or status['setup'] == 'skipped':
            return 'skipped', None

        return report.outcome, report.when if report.outcome == 'failed' else None

    def _process_error_info(self, item: Item, report: TestReport, result: TestResult) -> None:
        """
        Attach the error text, a screenshot and the last URL of the test's page.
        """
        page = getattr(item, 'page', None)
        if page is not None:
            if result.outcome != 'rerun':
                self._capture_screenshot(page, result)
            try:
                result.metadata['end_url'] = page.url
            except Exception:
                pass  # page already closed

        if report.longrepr:
            result.error = str(report.longrepr)
            reprcrash = getattr(report.longrepr, 'reprcrash', None)
            if reprcrash is not None:
                result.exception_type = reprcrash.message.split(':', 1)[0]
        for title, content in getattr(report, 'sections', []):
            if title == 'Soft assert failures':
                result.error = f'{result.error or ""}\n\n{content}'.strip()

    def _capture_screenshot(self, page: Page, result: TestResult) -> None:
        if self.config.screenshots_amount >= MAX_SCREENSHOTS:
            logger.debug('Screenshot limit reached, skipping screenshot')
            return
        try:
            screenshot = page.screenshot(type='jpeg', quality=60, scale='css', full_page=False)
        except Exception as e:
            logger.warning(f'Failed to capture screenshot: {e}')
            return
        result.screenshot = base64.b64encode(screenshot).decode('utf-8')
        self.config.screenshots_amount += 1

    @staticmethod
    def _collect_logs(item: Item, result: TestResult, status: dict[str, Any]) -> None:
        """
        Collect test_logger lines, the execution log, and captured output of every phase.
        """
        result.logs = list(getattr(item, 'test_logs', []))
        if hasattr(item, 'execution_log'):
            result.logs.extend(log for _, log in sorted(item.execution_log, key=lambda x: x[0]))

        # Report sections accumulate, the latest phase report holds the output of the earlier ones
        last_report = None
        for phase in PHASES:
            last_report = getattr(item, f'_report_{phase}_{status["execution_count"]}', last_report)
        if last_report is None:
            return

        for attr in ('caplog', 'capstderr', 'capstdout'):
            text = getattr(last_report, attr, '') or ''
            setattr(result, attr, text if text.strip() else None)
