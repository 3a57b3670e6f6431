"""
report_handler.py

Stores per-test results and renders the consolidated HTML report of a run.

Every xdist worker appends its results to reports/worker_<id>.json (one JSON document per line);
the controller node reads all of them back at session finish and renders report_template.html.

Classes:
    TestResult: Stores and manages individual test result data

Functions:
    save_test_result: Saves test results to JSON files
    aggregate_results: Combines results from multiple worker files
    calculate_stats: Generates test execution statistics
    format_timestamp: Converts Unix timestamps to readable format
    analyze_slow_execution_logs: Finds calls that were slow in several tests
    get_pytest_metadata: Collects pytest and package version info
    generate_html_report: Creates the final HTML test report
"""
import importlib.metadata
import json
import logging
import platform
import re
import time
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import jinja2
import pytest

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent
TEMPLATE_NAME = 'report_template.html'

OUTCOMES = ('passed', 'failed', 'skipped', 'error', 'xfailed', 'xpassed', 'rerun')


class TestResult:
    """
    Stores and manages test result data including execution details, metadata and environment info.

    Attributes:
        timestamp (float): Test execution timestamp
        nodeid (str): Pytest node identifier
        outcome (str): Test result outcome (passed/failed/skipped etc)
        duration (float): Test execution duration in seconds
        description (str): Test docstring/description
        markers (list[str]): Applied pytest markers
        metadata (Dict): Additional test metadata, e.g. the last URL of the page
        environment (Dict): Environment information
        screenshot (Optional[str]): Base64 JPEG of the page if captured
        error (Optional[str]): Error details if test failed
        failed_step (Optional[str]): Name of the page object step that raised
        logs (list[str]): Test execution logs
        worker_id (str): xdist worker identifier
    """
    __test__ = False  # not a test class, despite the name

    def __init__(self, item: pytest.Item, outcome: str, duration: float, phase_durations: dict[str, float],
                 **kwargs) -> None:
        self.timestamp = kwargs.get('timestamp', time.time())
        self.nodeid = item.nodeid
        self.outcome = outcome
        self.duration = duration
        self.phase_durations = phase_durations
        self.description = (item.obj.__doc__ or '').strip()
        self.markers = [mark.name for mark in item.iter_markers()]
        self.metadata: dict[str, Any] = {}
        self.environment = self._get_environment_info(item)
        self.screenshot: Optional[str] = None
        self.error: Optional[str] = None
        self.failed_step: Optional[str] = getattr(item, 'failed_step', None)
        self.logs: list[str] = []
        self.exception_type = ''
        self.wasxfail: Optional[str] = None
        self.skip_reason: Optional[str] = None
        self.error_phase: Optional[str] = None
        self.execution_count: int = getattr(item, 'execution_count', 1)
        self.caplog: Optional[str] = None
        self.capstderr: Optional[str] = None
        self.capstdout: Optional[str] = None

        if hasattr(item.config, 'workerinput'):
            self.worker_id = item.config.workerinput.get('workerid', 'master')
        else:
            self.worker_id = 'master'

    @staticmethod
    def _get_environment_info(item: pytest.Item) -> dict[str, str]:
        """
        Collect environment information including browser details.
        """
        env_info = {
            'python_version': platform.python_version(),
            'platform': platform.platform(),
        }

        page = getattr(item, 'page', None)
        if page is not None:
            try:
                browser = page.context.browser
                env_info.update({
                    'browser': browser.browser_type.name.capitalize(),
                    'browser_version': browser.version
                })
            except Exception:
                env_info.update({'browser': 'Unknown', 'browser_version': 'Unknown'})
        return env_info

    def to_dict(self) -> dict[str, Any]:
        """
        Convert test result to dictionary for JSON serialization.
        """
        return {
            'timestamp': self.timestamp,
            'nodeid': self.nodeid,
            'outcome': self.outcome,
            'duration': self.duration,
            'phase_durations': self.phase_durations,
            'description': self.description,
            'markers': self.markers,
            'metadata': self.metadata,
            'environment': self.environment,
            'screenshot': self.screenshot,
            'error': self.error,
            'failed_step': self.failed_step,
            'logs': self.logs,
            'exception_type': self.exception_type,
            'wasxfail': self.wasxfail,
            'skip_reason': self.skip_reason,
            'worker_id': self.worker_id,
            'error_phase': self.error_phase,
            'execution_count': self.execution_count,
            'caplog': self.caplog,
            'capstderr': self.capstderr,
            'capstdout': self.capstdout
        }


def save_test_result(result: TestResult, report_dir: Path) -> None:
    """
    Append the test result to the JSON lines file of the current worker.
    """
    report_file = report_dir / f'worker_{result.worker_id}.json'
    with open(report_file, 'a', encoding='utf-8') as f:
        json.dump(result.to_dict(), f)
        f.write('\n')


def aggregate_results(report_dir: Path) -> list[dict[str, Any]]:
    """
    Aggregate test results from all worker files.

    Args:
        report_dir: Directory containing result files

    Returns:
        List of test results from all workers, duplicates (same nodeid and timestamp) removed
    """
    assert isinstance(report_dir, Path), 'report_dir must be a Path object'
    assert report_dir.exists(), f'Report directory does not exist: {report_dir}'

    seen_tests = set()
    unique_results = []

    for json_file in sorted(report_dir.glob('*.json')):
        with open(json_file, encoding='utf-8') as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    test = json.loads(line)
                except json.JSONDecodeError as e:
                    raise AssertionError(f'Invalid JSON in results file {json_file}: {str(e)}')

                for key in ('nodeid', 'timestamp', 'outcome'):
                    assert key in test, f"Test result missing '{key}' in file {json_file}"

                unique_key = (test['nodeid'], test['timestamp'])
                if unique_key not in seen_tests:
                    seen_tests.add(unique_key)
                    unique_results.append(test)

    return sorted(unique_results, key=lambda r: r['timestamp'])


def calculate_stats(results: list[dict[str, Any]]) -> dict[str, Any]:
    """
    Count outcomes and measure the wall time of the run.
    """
    assert isinstance(results, list), 'Results must be a list'

    stats: dict[str, Any] = {outcome: 0 for outcome in OUTCOMES}
    if not results:
        stats.update(total=0, start_time=0, end_time=0, total_duration=0, success_rate=0)
        return stats

    for result in results:
        for key in ('timestamp', 'outcome', 'duration'):
            assert key in result, f"Test result missing required '{key}' key"
        if result['outcome'] in stats:
            stats[result['outcome']] += 1

    start_time = min(r['timestamp'] for r in results)
    end_time = max(r['timestamp'] + (r['duration'] or 0) for r in results)
    stats.update(
        total=len(results),
        start_time=start_time,
        end_time=end_time,
        total_duration=end_time - start_time,
        success_rate=round(stats['passed'] / len(results) * 100, 2),
    )
    return stats


def format_timestamp(timestamp: float) -> str:
    """
    Convert Unix timestamp to readable format.
    """
    return time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(timestamp))


def analyze_slow_execution_logs(results: list[dict[str, Any]], threshold_seconds: float = 10.0,
                                min_occurrences: int = 3) -> dict[str, int]:
    """
    Find steps and element calls that were slower than the threshold in several tests.

    Log lines look like "  step - CartPage.open: 12.3456 seconds".

    Returns:
        Mapping of "type - name" to the number of slow occurrences, most frequent first
    """
    log_frequency: dict[str, int] = {}
    for test in results:
        for log in test.get('logs') or []:
            parts = log.strip().rsplit(': ', 1)
            if len(parts) != 2:
                continue
            duration_match = re.match(r'(\d+\.?\d*) seconds', parts[1])
            if duration_match and float(duration_match.group(1)) > threshold_seconds:
                log_frequency[parts[0]] = log_frequency.get(parts[0], 0) + 1

    frequent = {name: count for name, count in log_frequency.items() if count >= min_occurrences}
    return dict(sorted(frequent.items(), key=lambda x: x[1], reverse=True))


@lru_cache(maxsize=1)
def get_pytest_metadata() -> dict[str, Union[str, dict[str, str]]]:
    """
    Get version information for pytest and the packages the suite runs on.
    """
    metadata = {
        'pytest_version': pytest.__version__,
        'packages': {}
    }

    for package in ('pytest-xdist', 'pytest-rerunfailures', 'allure-pytest', 'playwright', 'jinja2'):
        try:
            metadata['packages'][package] = importlib.metadata.version(package)
        except importlib.metadata.PackageNotFoundError:
            pass

    return metadata


def render_report(results: list[dict[str, Any]], title: str) -> str:
    """
    Render the report page for a list of aggregated results.
    """
    env = jinja2.Environment(loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)), autoescape=True)
    env.filters['format_timestamp'] = format_timestamp

    stats = calculate_stats(results)
    stats['slow_functions'] = analyze_slow_execution_logs(results)

    template = env.get_template(TEMPLATE_NAME)
    return template.render(
        title=title,
        stats=stats,
        results=results,
        environment=results[0].get('environment', {}) if results else {},
        metadata=get_pytest_metadata(),
        generated_at=time.strftime('%Y-%m-%d %H:%M:%S'),
    )


def generate_html_report(session: pytest.Session, report_dir: Path) -> Optional[Path]:
    """
    Generate the final HTML report. Only the controller node writes it.

    Args:
        session: Pytest session object
        report_dir: Directory containing test results

    Returns:
        Path of the written report, or None on worker nodes
    """
    if hasattr(session.config, 'workerinput'):
        return None

    report_path = Path(session.config.getoption('--html-report'))
    report_path.parent.mkdir(parents=True, exist_ok=True)

    results = aggregate_results(report_dir)
    try:
        html_output = render_report(results, session.config.getoption('--report-title'))
    except jinja2.exceptions.TemplateError as e:
        error_message = f'Template error when generating report: {str(e)}'
        report_path.write_text(f'<html><body><h1>Error Generating Report</h1><p>{error_message}</p></body></html>',
                               encoding='utf-8')
        raise AssertionError(error_message)

    report_path.write_text(html_output, encoding='utf-8')
    logger.info(f'HTML report with {len(results)} results written to {report_path}')
    return report_path
