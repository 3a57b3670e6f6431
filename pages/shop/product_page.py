import re

from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from pages.models import ProductInfo
from utils.convert import to_number
from utils.step import step


class ProductPage(BasePage):

    @property
    def unique_element(self) -> BaseElement:
        return self.find_element('.product-details')

    @property
    def product_information(self) -> BaseElement:
        return self.find_element('.product-information')

    @property
    def product_name(self) -> BaseElement:
        return self.find_element(self.product_information.raw.locator('h2'))

    @property
    def product_price(self) -> BaseElement:
        return self.find_element(self.product_information.raw.get_by_text(re.compile(r'^Rs\.\s*\d+')).first)

    @property
    def quantity_input(self) -> BaseElement:
        return self.find_element('#quantity')

    @property
    def add_to_cart_button(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('button', name='Add to cart'))

    @step()
    def add_to_cart(self, amount: int = 1) -> None:
        self.quantity_input.fill(str(amount))
        self.add_to_cart_button.click()

    @step()
    def get_product_info(self) -> ProductInfo:
        self.product_information.wait_until_visible()
        return ProductInfo(name=self.product_name.text, price=to_number(self.product_price.text))

    @step()
    def assert_product_info(self, expected: ProductInfo) -> None:
        actual = self.get_product_info()
        self.soft_assert.check(actual.name == expected.name,
                               f'Product name should be "{expected.name}", got "{actual.name}"')
        self.soft_assert.check(actual.price == expected.price,
                               f'Price of "{expected.name}" should be {expected.price}, got {actual.price}')
