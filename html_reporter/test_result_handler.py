import time
from unittest.mock import MagicMock, patch

import pytest

from html_reporter.result_handler import MAX_SCREENSHOTS, ResultHandler
from utils.soft_assert import SoftAssertContextManager


@pytest.mark.unit
class TestResultHandler:
    """Unit tests for the ResultHandler class."""

    @pytest.fixture
    def mock_config(self):
        config = MagicMock()
        config._aqa_test_status = {}
        config._aqa_test_timing = {}
        config.screenshots_amount = 0
        config.option.reruns = 0
        del config.workerinput
        return config

    @pytest.fixture
    def handler(self, mock_config, tmp_path):
        return ResultHandler(mock_config, tmp_path)

    @pytest.fixture
    def mock_item(self, mock_config):
        item = MagicMock()
        item.nodeid = 'tests/test_search.py::TestSearch::test_search_products_by_keywords'
        item.execution_count = 1
        item.config = mock_config
        item.obj.__doc__ = 'Search products'
        item.iter_markers.return_value = []
        for attr in ('page', 'failed_step', '_soft_assert', 'test_logs', 'execution_log'):
            delattr(item, attr)
        return item

    @pytest.fixture
    def mock_call(self):
        call = MagicMock()
        call.excinfo = None
        return call

    @staticmethod
    def make_report(when, outcome='passed', duration=0.5, **kwargs):
        report = MagicMock()
        report.when = when
        report.outcome = outcome
        report.duration = duration
        report.start = kwargs.pop('start', time.time())
        report.longrepr = kwargs.pop('longrepr', None)
        report.sections = []
        report.caplog = kwargs.pop('caplog', '')
        report.capstderr = ''
        report.capstdout = ''
        if 'wasxfail' in kwargs:
            report.wasxfail = kwargs.pop('wasxfail')
        else:
            del report.wasxfail
        return report

    def run_phases(self, handler, item, call, outcomes):
        for when, outcome in outcomes:
            handler.process_test_result(item, call, self.make_report(when, outcome))

    def test_init(self, mock_config):
        del mock_config.screenshots_amount
        handler = ResultHandler(mock_config)

        assert handler.config == mock_config
        assert mock_config.screenshots_amount == 0

    def test_status_is_tracked_per_attempt(self, handler, mock_item):
        key, status = handler._get_test_status(mock_item)
        mock_item.execution_count = 2
        second_key, _ = handler._get_test_status(mock_item)

        assert key.endswith(':1')
        assert second_key.endswith(':2')
        assert status['setup'] is None
        assert not status['final_result_reported']

    def test_track_phase_timing(self, handler, mock_item):
        key, _ = handler._get_test_status(mock_item)
        handler._track_phase_timing(self.make_report('setup', duration=1.0, start=100.0), key)
        handler._track_phase_timing(self.make_report('call', duration=2.0, start=101.0), key)

        timing = handler.config._aqa_test_timing[key]
        assert timing['start_time'] == 100.0
        assert timing['total_duration'] == 3.0
        assert timing['phase_durations']['call'] == 2.0

    @patch('html_reporter.result_handler.save_test_result')
    def test_passed_test(self, mock_save, handler, mock_item, mock_call):
        self.run_phases(handler, mock_item, mock_call, [('setup', 'passed'), ('call', 'passed'),
                                                        ('teardown', 'passed')])

        mock_save.assert_called_once()
        result = mock_save.call_args[0][0]
        assert result.outcome == 'passed'
        assert result.error_phase is None

    @patch('html_reporter.result_handler.save_test_result')
    def test_result_is_saved_once(self, mock_save, handler, mock_item, mock_call):
        self.run_phases(handler, mock_item, mock_call, [('setup', 'passed'), ('call', 'failed'),
                                                        ('teardown', 'passed')])

        mock_save.assert_called_once()
        assert mock_save.call_args[0][0].outcome == 'failed'
        assert mock_save.call_args[0][0].error_phase == 'call'

    @patch('html_reporter.result_handler.save_test_result')
    def test_setup_error(self, mock_save, handler, mock_item, mock_call):
        mock_call.excinfo = MagicMock()
        mock_call.excinfo.type = RuntimeError

        handler.process_test_result(mock_item, mock_call, self.make_report('setup', 'failed'))

        result = mock_save.call_args[0][0]
        assert result.outcome == 'error'
        assert result.error_phase == 'setup'

    @patch('html_reporter.result_handler.save_test_result')
    def test_soft_assert_failures_fail_the_call(self, mock_save, handler, mock_item, mock_call):
        mock_item._soft_assert = SoftAssertContextManager()
        mock_item._soft_assert.failures = ['1. [CartPage.validate_cart_items] \nPrice mismatch ']
        handler.process_test_result(mock_item, mock_call, self.make_report('setup'))
        call_report = self.make_report('call', 'passed')

        handler.process_test_result(mock_item, mock_call, call_report)

        assert call_report.outcome == 'failed'
        assert 'Soft assert failures (1)' in call_report.longrepr
        result = mock_save.call_args[0][0]
        assert result.outcome == 'failed'
        assert 'Price mismatch' in result.error

    def test_soft_assert_failures_added_to_hard_failure(self, handler, mock_item, mock_call):
        mock_item._soft_assert = SoftAssertContextManager()
        mock_item._soft_assert.failures = ['1. \nName mismatch ']
        call_report = self.make_report('call', 'failed', longrepr='AssertionError: no rows')
        _, status = handler._get_test_status(mock_item)

        handler._process_soft_assertions(mock_item, call_report, status)

        assert call_report.longrepr == 'AssertionError: no rows'
        assert call_report.sections[0][0] == 'Soft assert failures'

    def test_soft_assert_failures_with_xfail(self, handler, mock_item):
        mock_item._soft_assert = SoftAssertContextManager()
        mock_item._soft_assert.failures = ['1. \nKnown issue ']
        report = self.make_report('call', 'passed', wasxfail='reason: known issue')
        _, status = handler._get_test_status(mock_item)

        handler._process_soft_assertions(mock_item, report, status)

        assert report.outcome == 'skipped'
        assert status['xfail_status'] == 'xfailed'

    @patch('html_reporter.result_handler.save_test_result')
    def test_rerun_marking(self, mock_save, handler, mock_item, mock_call):
        handler.config.option.reruns = 1
        self.run_phases(handler, mock_item, mock_call, [('setup', 'passed'), ('call', 'failed')])

        assert mock_save.call_args[0][0].outcome == 'rerun'

    @pytest.mark.parametrize('status, expected', [
        ({'xfail_status': 'xfailed', 'setup': 'passed', 'call': 'skipped', 'teardown': None}, ('xfailed', 'call')),
        ({'xfail_status': None, 'setup': 'error', 'call': None, 'teardown': None}, ('error', 'setup')),
        ({'xfail_status': None, 'setup': 'passed', 'call': 'passed', 'teardown': 'failed'}, ('failed', 'teardown')),
        ({'xfail_status': None, 'setup': 'passed', 'call': 'passed', 'teardown': 'passed'}, ('passed', None)),
        ({'xfail_status': None, 'setup': 'skipped', 'call': None, 'teardown': 'passed'}, ('skipped', None)),
    ])
    def test_determine_outcome(self, status, expected):
        report = TestResultHandler.make_report('teardown')

        assert ResultHandler._determine_outcome(report, status) == expected

    def test_is_test_complete(self):
        status = {'setup': 'passed'}

        assert ResultHandler._is_test_complete(self.make_report('teardown'), status)
        assert ResultHandler._is_test_complete(self.make_report('setup', 'failed'), status)
        assert ResultHandler._is_test_complete(self.make_report('call', 'failed'), status)
        assert not ResultHandler._is_test_complete(self.make_report('call', 'passed'), status)

    @patch('html_reporter.result_handler.save_test_result')
    def test_screenshot_and_url_of_failed_test(self, mock_save, handler, mock_item, mock_call):
        mock_item.page = MagicMock()
        mock_item.page.screenshot.return_value = b'jpeg'
        mock_item.page.url = 'https://automationexercise.com/checkout'
        mock_item.failed_step = 'CheckoutPage.assert_address'
        self.run_phases(handler, mock_item, mock_call, [('setup', 'passed'), ('call', 'failed')])

        result = mock_save.call_args[0][0]
        assert result.screenshot == 'anBlZw=='
        assert result.metadata['end_url'] == 'https://automationexercise.com/checkout'
        assert result.failed_step == 'CheckoutPage.assert_address'
        assert handler.config.screenshots_amount == 1

    def test_screenshot_limit(self, handler):
        handler.config.screenshots_amount = MAX_SCREENSHOTS
        page = MagicMock()
        result = MagicMock()
        result.screenshot = None

        handler._capture_screenshot(page, result)

        page.screenshot.assert_not_called()
        assert result.screenshot is None

    def test_screenshot_failure_is_not_fatal(self, handler):
        page = MagicMock()
        page.screenshot.side_effect = RuntimeError('Target page, context or browser has been closed')
        result = MagicMock()
        result.screenshot = None

        handler._capture_screenshot(page, result)

        assert result.screenshot is None
        assert handler.config.screenshots_amount == 0

    @patch('html_reporter.result_handler.save_test_result')
    def test_collect_logs(self, mock_save, handler, mock_item, mock_call):
        mock_item.test_logs = ['Cart has 2 products']
        mock_item.execution_log = [(2.0, '  function - click: 0.1 seconds'), (1.0, 'step - CartPage.open: 1 seconds')]
        handler.process_test_result(mock_item, mock_call, self.make_report('setup'))
        handler.process_test_result(mock_item, mock_call, self.make_report('call'))
        handler.process_test_result(mock_item, mock_call, self.make_report('teardown', caplog='INFO teardown'))

        result = mock_save.call_args[0][0]
        assert result.logs == ['Cart has 2 products', 'step - CartPage.open: 1 seconds',
                               '  function - click: 0.1 seconds']
        assert result.caplog == 'INFO teardown'
        assert result.capstdout is None

    def test_results_written_to_report_dir(self, handler, mock_item, mock_call, tmp_path):
        self.run_phases(handler, mock_item, mock_call, [('setup', 'passed'), ('call', 'passed'),
                                                        ('teardown', 'passed')])

        assert (tmp_path / 'worker_master.json').exists()
