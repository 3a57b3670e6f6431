from typing import Iterable

from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from pages.components.order_table import OrderTable
from pages.models import CartItem
from utils.step import step

PRODUCT_ROWS = 'tbody tr[id^="product-"]'


class CartPage(BasePage):

    @property
    def unique_element(self) -> BaseElement:
        return self.find_element('section#cart_items')

    @property
    def order_table(self) -> OrderTable:
        return OrderTable(self.page.locator(f'#cart_info_table {PRODUCT_ROWS}'), self.page, self.timeout)

    @property
    def proceed_to_checkout_button(self) -> BaseElement:
        return self.find_element('a.check_out')

    @property
    def empty_cart_message(self) -> BaseElement:
        return self.find_element(self.page.locator('#empty_cart p').filter(has_text='Cart is empty!'))

    def product_row(self, name: str) -> BaseElement:
        return self.find_element(self.order_table.row(name))

    @step()
    def open(self) -> 'CartPage':
        self.goto('/view_cart')
        return self

    @step()
    def delete_product(self, name: str) -> None:
        self.find_element(self.product_row(name).raw.locator('.cart_quantity_delete')).click()

    @step()
    def assert_product_deleted(self, name: str, timeout: int = 5000) -> None:
        """
        Poll until no row shows the product any more.
        """
        try:
            self.product_row(name).wait_for_count(0, timeout=timeout)
        except AssertionError as e:
            raise AssertionError(f'Expected "{name}" to be removed from cart') from e

    @step()
    def assert_cart_empty(self) -> None:
        self.empty_cart_message.wait_until_visible()

    @step()
    def validate_cart_items(self, expected: Iterable[CartItem]) -> int:
        return self.order_table.validate_cart_items(expected)

    @step()
    def click_proceed_checkout(self) -> None:
        self.proceed_to_checkout_button.click()
