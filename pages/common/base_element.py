from typing import Optional, Union

from playwright.sync_api import Locator, Page, expect

from utils.track_time import track_execution_time


class BaseElement:
    """
    BaseElement is a wrapper class for Playwright's Locator object, providing
    common interaction methods for web elements like clicking, typing and waiting.

    :param locator: Locator to target the specific web element.
    :param page: Playwright Page object, representing the browser tab.
    :param default_timeout: Default timeout for element interactions in milliseconds.
    """

    def __init__(self, locator: Locator, page: Page, default_timeout: int = 10000):
        self.raw: Locator = locator  # The actual located web element
        self.page = page
        self._default_timeout = default_timeout

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.raw})'

    @property
    def text(self) -> str:
        """
        Get the text content of the element.

        :return: The text content as a string.
        """
        return (self.raw.text_content(timeout=self._default_timeout) or '').strip()

    @property
    def inner_text(self) -> str:
        """
        Get the rendered text of the element, as the user sees it.
        """
        return self.raw.inner_text(timeout=self._default_timeout).strip()

    @property
    def is_visible(self) -> bool:
        """
        Check if the element is visible right now, without waiting.
        """
        return self.raw.is_visible()

    @property
    def count(self) -> int:
        """
        Number of elements currently matching the locator.
        """
        return self.raw.count()

    def nth(self, index: int) -> 'BaseElement':
        return BaseElement(self.raw.nth(index), self.page, self._default_timeout)

    def all_inner_texts(self) -> list[str]:
        return [text.strip() for text in self.raw.all_inner_texts()]

    @track_execution_time
    def click(self, force: bool = False) -> None:
        """
        Click the element. Optionally force the click, bypassing visibility and interaction constraints.

        :param force: If True, forces the click even if the element is not interactable (default is False).
        """
        self.raw.click(timeout=self._default_timeout, force=force)

    @track_execution_time
    def fill(self, text: str) -> None:
        """
        Clear any existing content and fill the element with the provided text.

        Raises:
            playwright.sync_api.TimeoutError: If the action cannot be completed within the default timeout.
        """
        self.raw.fill(text, timeout=self._default_timeout)

    @track_execution_time
    def check(self) -> None:
        """
        Check a checkbox or radio button. Does nothing if it is already checked.
        """
        self.raw.check(timeout=self._default_timeout)

    @track_execution_time
    def select_option(self, option: Union[str, list[str]]) -> None:
        """
        Select an option of a <select> element by value or label.
        """
        self.raw.select_option(option, timeout=self._default_timeout)

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get the value of a specified attribute of the element.

        :param name: The name of the attribute to retrieve.
        :return: The attribute value as a string or None if not found.
        """
        return self.raw.get_attribute(name, timeout=self._default_timeout)

    def hover(self, force: bool = False) -> None:
        self.raw.hover(timeout=self._default_timeout, force=force)

    def scroll_into_view(self) -> None:
        self.raw.scroll_into_view_if_needed(timeout=self._default_timeout)

    @track_execution_time
    def wait_until_hidden(self, timeout: Optional[int] = None) -> 'BaseElement':
        """
        Wait until the element is hidden, either removed from the DOM or made invisible.

        :param timeout: Time to wait in milliseconds, defaults to the element timeout.
        """
        self.raw.wait_for(state='hidden', timeout=timeout or self._default_timeout)
        return self

    @track_execution_time
    def wait_until_visible(self, timeout: Optional[int] = None) -> 'BaseElement':
        """
        Wait until the element becomes visible on the page.

        This method ensures that the element is present in the DOM and is not hidden
        (e.g., has `display: none` or `visibility: hidden` styles applied).

        Raises:
            playwright.sync_api.TimeoutError: If the element does not become visible within the timeout.
        """
        self.raw.wait_for(state='visible', timeout=timeout or self._default_timeout)
        return self

    @track_execution_time
    def wait_for_count(self, count: int, timeout: Optional[int] = None) -> None:
        """
        Poll until exactly `count` elements match, using Playwright's expect logic.

        Zero means the element is gone from the DOM, not merely hidden.

        Raises:
            AssertionError: If the count is still different when the timeout elapses.
        """
        expect(self.raw).to_have_count(count, timeout=timeout or self._default_timeout)
