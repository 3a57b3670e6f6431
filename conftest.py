"""
conftest.py

Pytest configuration: Playwright browser and contexts, the page object fixtures
(plain, pre-authenticated and freshly registered user), soft assertions and reporting hooks.
Report building lives in html_reporter/.
"""

import logging
import os
from pathlib import Path

import psutil
import pytest
from _pytest.runner import CallInfo
from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from html_reporter.report_handler import generate_html_report
from html_reporter.result_handler import ResultHandler
from pages import Pages
from pages.common.intercept import block_ads
from utils.person_factory import create_person
from utils.sessions import (NewUser, create_account_via_api, login_registered_user, provision_session,
                            register_new_user, session_slot)
from utils.settings import Settings, get_settings
from utils.soft_assert import SoftAssertContextManager, get_soft_assert
from utils.track_time import track_execution_time

logger = logging.getLogger(__name__)

REPORT_DIR = Path('reports')


# Pytest Configuration
def pytest_addoption(parser):
    """Add custom command-line options"""
    parser.addoption('--headless', action='store', default=None,
                     help='Run tests in headless mode (true/false), overrides HEADLESS')
    parser.addoption('--base-url-override', action='store', default=None,
                     help='Root URL of the site under test, overrides BASE_URL')
    parser.addoption('--html-report', action='store', default='reports/test_report.html',
                     help='Path to HTML report file')
    parser.addoption('--report-title', action='store', default='Automation Exercise Report',
                     help='Title for the HTML report')


@pytest.hookimpl
def pytest_configure(config):
    config.screenshots_amount = 0  # Limit the number of screenshots attached to reports.
    config.addinivalue_line('markers', 'ui: end-to-end test that drives a real browser')

    # Options win over the environment; settings are read once afterwards
    if config.getoption('headless') is not None:
        os.environ['HEADLESS'] = config.getoption('headless')
    if config.getoption('base_url_override'):
        os.environ['BASE_URL'] = config.getoption('base_url_override')
    get_settings.cache_clear()
    settings = get_settings()

    # One rerun of failed tests on CI, none locally unless asked for
    if settings.ci and not getattr(config.option, 'reruns', 0):
        config.option.reruns = 1

    REPORT_DIR.mkdir(exist_ok=True)


# Settings
@pytest.fixture(scope='session')
def settings() -> Settings:
    return get_settings()


@pytest.fixture(scope='session')
def base_url(settings) -> str:
    return settings.base_url


# Playwright Fixtures
@pytest.fixture(scope='session')
def playwright_instance() -> Playwright:
    """
    Set up the Playwright instance for the test session.
    """
    with sync_playwright() as playwright:
        yield playwright


@pytest.fixture(scope='session')
def browser(playwright_instance, settings) -> Browser:
    """
    Launch a Chromium browser instance shared by all tests of this worker.

    Environment Variables:
        HEADLESS: When 'true', runs the browser without a visible UI (always on CI)
    """
    if settings.headless:
        browser = playwright_instance.chromium.launch(headless=True)
    else:
        browser = playwright_instance.chromium.launch(headless=False, args=['--start-maximized'])
    yield browser
    browser.close()


def _new_context(browser: Browser, settings: Settings, **kwargs) -> BrowserContext:
    """
    Open an isolated context with ads blocked. Must happen before the first navigation.
    """
    if settings.headless:
        kwargs.update(viewport={'width': 1920, 'height': 1080}, screen={'width': 1920, 'height': 1080})
    else:
        kwargs.update(no_viewport=True)
    context = browser.new_context(base_url=settings.base_url, **kwargs)
    context.set_default_timeout(settings.default_timeout)
    return block_ads(context)


@pytest.fixture
def context(browser, settings) -> BrowserContext:
    """
    A fresh browser context per test: no cookies, no storage, ads blocked.
    """
    context = _new_context(browser, settings)
    yield context
    context.close()


@pytest.fixture
def page(request, context) -> Page:
    """
    Create a new page within the test's context.

    Notes:
        - Attaches the page to the request node so reporting hooks can take a screenshot
    """
    page = context.new_page()
    request.node.page = page
    yield page
    page.close()


@pytest.fixture
def pages(page) -> Pages:
    """
    Page objects for an anonymous visitor.
    """
    return Pages(page)


@pytest.fixture(scope='session')
@track_execution_time
def auth_storage_state(browser, settings, worker_id) -> Path:
    """
    Log this worker's pool user in once per run and return the stored session file.

    Worker gwN uses slot N, so parallel workers never share a file. A worker without a slot of
    its own fails its tests with a usage error instead of overwriting the session of another worker.
    """
    index = session_slot(worker_id, settings.workers_count)
    return provision_session(browser, settings.base_url, index, settings.env_name, settings.auth_dir)


@pytest.fixture
def user_pages(request, browser, settings, auth_storage_state) -> Pages:
    """
    Page objects for a logged in pool user, restored from the stored session of this worker.
    """
    context = _new_context(browser, settings, storage_state=str(auth_storage_state))
    page = context.new_page()
    request.node.page = page
    yield Pages(page)
    context.close()


@pytest.fixture
def new_user_pages(pages) -> NewUser:
    """
    Register a brand new customer through the UI and return their page objects and details.
    """
    return register_new_user(pages, create_person())


@pytest.fixture
def api_user_pages(pages, settings) -> NewUser:
    """
    Create a new customer through the account API, then log them in through the UI.
    Faster than new_user_pages when the signup form itself is not under test.
    """
    person = create_person()
    create_account_via_api(pages.page.context.request, settings.base_url, person)
    return login_registered_user(pages, person)


# Pytest Hooks
@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call: CallInfo) -> None:
    """
    Build the report entry of the test once pytest has produced the phase report.
    """
    outcome = yield
    report = outcome.get_result()

    handler = ResultHandler(item.config, REPORT_DIR)
    handler.process_test_result(item, call, report)


def _kill_orphan_browsers() -> None:
    current_pid = os.getpid()
    for proc in psutil.process_iter():
        try:
            if proc.ppid() == current_pid and 'playwright' in proc.name().lower():
                proc.kill()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass


@pytest.hookimpl
def pytest_sessionfinish(session):
    """
    Clean up browser processes of this worker, then let the controller build the HTML report
    and drop the per-worker result files.
    """
    _kill_orphan_browsers()

    if hasattr(session.config, 'workerinput'):
        return

    generate_html_report(session, REPORT_DIR)

    for json_file in REPORT_DIR.glob('*.json'):
        json_file.unlink(missing_ok=True)


# Test logging helper
@pytest.fixture
def test_logger(request):
    """
    Fixture to add logs to test results that will be included in the final report.

    Returns:
        callable: A function that adds messages to the test logs
    """

    def _log_message(message: str):
        if not hasattr(request.node, 'test_logs'):
            request.node.test_logs = []
        request.node.test_logs.append(message)
        logger.info(message)

    return _log_message


@pytest.fixture
def soft_assert() -> SoftAssertContextManager:
    """
    Soft assertion collector of the test, the same instance page objects write to.
    Failures are reported together when the test body finishes.
    """
    return get_soft_assert()


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_protocol(item, nextitem):
    """
    Keep a reference to the running test item for page objects and step reporting.
    """
    pytest.current_item = item
    yield
    pytest.current_item = None


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_setup(item):
    """
    Every attempt, reruns included, starts with clean soft assert and step state.
    """
    for attr in ('_soft_assert', 'failed_step', 'step_stack', 'call_stack', 'execution_log', 'test_logs'):
        if hasattr(item, attr):
            delattr(item, attr)


@pytest.hookimpl(tryfirst=True)
def pytest_configure_node(node):
    node.log.info(f'Worker {node.gateway.id} is configured and starting')


@pytest.hookimpl(tryfirst=True)
def pytest_testnodedown(node, error):
    if error:
        node.log.error(f'Worker {node.gateway.id} failed: {error}')
    else:
        node.log.info(f'Worker {node.gateway.id} finished successfully')
