import re
from typing import Iterable, Mapping

from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from utils.step import step


class CategoryComponent(BasePage):
    """
    Left sidebar with collapsible product categories.
    """

    @property
    def unique_element(self) -> BaseElement:
        return self.category_panel

    @property
    def category_panel(self) -> BaseElement:
        return self.find_element('.panel-group.category-products')

    def category_link(self, category: str) -> BaseElement:
        return self.find_element(
            self.page.locator('.panel-title a').filter(has_text=re.compile(rf'^\s*{re.escape(category)}\s*$'))
        )

    def options_panel(self, category: str) -> BaseElement:
        """
        The collapsible panel a category link points to through its href fragment.

        Raises:
            ValueError: If the category link has no href.
        """
        href = self.category_link(category).get_attribute('href')
        if not href:
            raise ValueError(f'Category link for {category} has no href')
        return self.find_element(f'#{href.lstrip("#")}')

    def option_link(self, category: str, option: str) -> BaseElement:
        return self.find_element(self.options_panel(category).raw.locator('li a').filter(has_text=option).first)

    def _expand(self, category: str) -> BaseElement:
        link = self.category_link(category).wait_until_visible()
        panel = self.options_panel(category)
        if not panel.is_visible:
            link.click()
        return panel.wait_until_visible()

    @step()
    def assert_category_panel_exists(self) -> None:
        self.category_panel.wait_until_visible()

    @step()
    def verify_categories_and_options(self, expected: Mapping[str, Iterable[str]]) -> None:
        """
        For each category: its link is visible, its panel opens, and every option is listed.
        """
        for category, options in expected.items():
            panel = self._expand(category)
            for option in options:
                self.find_element(panel.raw.locator('li a').filter(has_text=option).first).wait_until_visible()

    @step()
    def select_category_option(self, category: str, option: str) -> None:
        self._expand(category)
        self.option_link(category, option).click()
