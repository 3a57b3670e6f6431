import re
from typing import Iterable

from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from pages.components.order_table import OrderTable
from pages.models import CartItem
from pages.shop.cart_page import PRODUCT_ROWS
from utils.convert import to_number
from utils.person_factory import Person
from utils.step import step


class CheckoutPage(BasePage):

    @property
    def unique_element(self) -> BaseElement:
        return self.find_element(self.page.locator('h2.heading').filter(has_text='Address Details'))

    @property
    def delivery_address(self) -> BaseElement:
        return self.find_element('#address_delivery')

    @property
    def invoice_address(self) -> BaseElement:
        return self.find_element('#address_invoice')

    @property
    def order_table(self) -> OrderTable:
        return OrderTable(self.page.locator(f'#cart_info {PRODUCT_ROWS}'), self.page, self.timeout)

    @property
    def total_amount(self) -> BaseElement:
        return self.find_element('#cart_info tbody tr:last-child p.cart_total_price')

    @property
    def comment_input(self) -> BaseElement:
        return self.find_element('textarea[name="message"]')

    @property
    def place_order_button(self) -> BaseElement:
        return self.find_element(self.page.locator('a.check_out').filter(has_text='Place Order'))

    @staticmethod
    def address_lines(person: Person) -> list[str]:
        """
        Lines of an address block as the site renders them for this person.
        """
        return [
            f'{person.title} {person.first_name} {person.last_name}',
            person.company,
            person.address1,
            person.address2,
            f'{person.city} {person.state} {person.zipcode}',
            person.country,
            person.mobile,
        ]

    @step()
    def assert_address(self, person: Person) -> None:
        """
        Every address line of the person appears in both the delivery and the invoice block.
        """
        for label, block in (('delivery', self.delivery_address), ('invoice', self.invoice_address)):
            text = re.sub(r'\s+', ' ', block.wait_until_visible().inner_text)
            for line in self.address_lines(person):
                self.soft_assert.check(line in text, f'"{line}" is missing from the {label} address: "{text}"')

    @step()
    def validate_cart_items(self, expected: Iterable[CartItem]) -> int:
        return self.order_table.validate_cart_items(expected)

    @step()
    def assert_cart_total(self, expected: int) -> None:
        actual = to_number(self.total_amount.inner_text)
        assert actual == expected, f'Total amount should be {expected}, got {actual}'

    @step()
    def add_comment(self, text: str) -> None:
        self.comment_input.fill(text)

    @step()
    def click_place_order(self) -> None:
        self.place_order_button.click()
