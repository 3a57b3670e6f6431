import re
from abc import ABC, abstractmethod
from typing import Optional, Pattern, Union

from playwright.sync_api import Locator, Page, TimeoutError as PlaywrightTimeoutError, expect

from pages.common.base_element import BaseElement
from utils.settings import get_settings
from utils.soft_assert import SoftAssertContextManager, get_soft_assert
from utils.step import step
from utils.track_time import track_execution_time


class BasePage(ABC):
    """
    A base class for every page object and component.

    Subclasses declare `unique_element`: the element that, once visible, proves the page
    finished rendering. `wait_for_load` is the only synchronisation point between
    navigation and interaction; pages never sleep.
    """

    def __init__(self, page: Page, timeout: Optional[int] = None):
        """
        Initialize the BasePage with a given Playwright page object.

        Args:
            page (Page): The Playwright page object. Borrowed, never closed by page objects.
            timeout (Optional[int]): Default timeout in milliseconds for waits and actions.
        """
        self.page = page
        self.timeout = timeout or get_settings().default_timeout

    @property
    @abstractmethod
    def unique_element(self) -> BaseElement:
        """
        The element whose visibility marks this page (or component) as loaded.
        """

    @property
    def soft_assert(self) -> SoftAssertContextManager:
        """
        Soft assertion collector of the running test. Failures are reported at the end of the test.
        """
        return get_soft_assert()

    @step()
    def goto(self, url: str) -> 'BasePage':
        """
        Navigate to the specified URL. Relative URLs resolve against the context base_url.
        Navigation errors propagate, nothing is retried here.
        """
        self.page.goto(url)
        return self

    @track_execution_time
    def wait_for_load(self, timeout: Optional[int] = None) -> 'BasePage':
        """
        Wait until the unique element of the page is visible.

        Raises:
            AssertionError: If the page is not loaded within the timeout.
        """
        try:
            self.unique_element.wait_until_visible(timeout=timeout or self.timeout)
        except PlaywrightTimeoutError as e:
            raise AssertionError(
                f'{type(self).__name__} is not loaded: {self.unique_element} is not visible '
                f'after {timeout or self.timeout} ms'
            ) from e
        return self

    def is_loaded(self, timeout: Optional[int] = None) -> 'BasePage':
        return self.wait_for_load(timeout)

    @step()
    def assert_url(self, expected: Union[str, Pattern[str]], timeout: Optional[int] = None) -> None:
        """
        Assert the current URL.

        Args:
            expected: Full URL, a path such as "/signup" (compared with the end of the URL,
                      query string ignored) or a compiled regular expression.
            timeout: How long to wait for the URL to match, in milliseconds.
        """
        if isinstance(expected, str) and expected.startswith('/'):
            expected = re.compile(rf'^[^?#]*{re.escape(expected)}/?([?#].*)?$')
        expect(self.page).to_have_url(expected, timeout=timeout or self.timeout)

    @step()
    def go_back(self) -> None:
        self.page.go_back()

    @step()
    def assert_element_visible(self, locator: Union[str, Locator, BaseElement], timeout: Optional[int] = None) -> None:
        """
        One-off visibility check for elements that do not deserve a dedicated method.
        """
        element = locator if isinstance(locator, BaseElement) else self.find_element(locator)
        expect(element.raw).to_be_visible(timeout=timeout or self.timeout)

    def find_element(self, selector: Union[str, Locator]) -> BaseElement:
        """
        Find a single element on the page.

        Args:
            selector (Union[str, Locator]): CSS or XPath selector, or a Playwright Locator object.

        Returns:
            BaseElement: A BaseElement object wrapping the located element.
        """
        if isinstance(selector, str):
            return BaseElement(self.page.locator(selector), self.page, self.timeout)
        return BaseElement(selector, self.page, self.timeout)

    def find_elements(self, selector: str, wait: bool = True) -> list[BaseElement]:
        """
        Find multiple elements on the page using the given selector.

        Args:
            selector (str): CSS or XPath selector.
            wait (bool): Whether to wait for the first element to become visible before proceeding.
        """
        if wait:
            self.page.locator(selector).nth(0).wait_for(state='visible', timeout=self.timeout)
        return [BaseElement(locator, self.page, self.timeout) for locator in self.page.locator(selector).all()]
