from typing import Optional

from playwright.sync_api import Locator, Page

from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage


class BaseComponent(BasePage):
    """
    A page object bound to a root element. Every child lookup is scoped to the root,
    so checks made on an overlay never match elements of the page underneath it.

    Subclasses set the class attribute `selector`; a ready locator can be passed instead.
    """
    selector: str = ''

    def __init__(self, page: Page, selector: Optional[str] = None, locator: Optional[Locator] = None,
                 timeout: Optional[int] = None):
        """
        :param page: The Playwright Page instance.
        :param selector: Root selector, defaults to the class selector.
        :param locator: An existing root locator. If provided, selector is ignored.
        """
        super().__init__(page, timeout)
        if locator is None:
            selector = selector or self.selector
            assert selector, f'{type(self).__name__} needs a root selector or locator'
            locator = page.locator(selector)
        self.root = locator  # The root locator of the component

    @property
    def element(self) -> BaseElement:
        """
        The root base element of the component.
        """
        return BaseElement(self.root, self.page, self.timeout)

    @property
    def unique_element(self) -> BaseElement:
        return self.element

    @property
    def is_visible(self) -> bool:
        return self.root.is_visible()

    def child_el(self, selector: str) -> BaseElement:
        """
        Find an element within the component's scope.
        """
        return BaseElement(self.root.locator(selector), self.page, self.timeout)

    def child_by_role(self, role: str, name: str) -> BaseElement:
        return BaseElement(self.root.get_by_role(role, name=name), self.page, self.timeout)

    def wait_for_invisibility(self, timeout: Optional[int] = None) -> None:
        """
        Wait until the component's root element is hidden.

        :param timeout: Timeout in milliseconds.
        """
        self.element.wait_until_hidden(timeout=timeout or self.timeout)
