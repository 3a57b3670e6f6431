import random
import re
from typing import Optional
from urllib.parse import quote

from pages.common.base_component import BaseComponent
from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from pages.models import ProductInfo
from utils.convert import to_number
from utils.random_pick import pick_product_index
from utils.step import step


class ProductCard(BaseComponent):
    selector = '.features_items .product-image-wrapper'

    @property
    def name(self) -> str:
        return self.child_el('.productinfo p').inner_text

    @property
    def price(self) -> int:
        return to_number(self.child_el('.productinfo h2').inner_text)

    @property
    def add_to_cart_button(self) -> BaseElement:
        """
        The add-to-cart button of the overlay that covers the card while it is hovered.
        """
        return self.child_el('.product-overlay a.add-to-cart')

    @property
    def view_product_link(self) -> BaseElement:
        return self.child_el('.choose a[href^="/product_details/"]')

    def info(self, index: Optional[int] = None) -> ProductInfo:
        return ProductInfo(name=self.name, price=self.price, index=index)


class ProductsPage(BasePage):

    @property
    def unique_element(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('heading', name='All Products'))

    @property
    def title(self) -> BaseElement:
        return self.find_element('.features_items h2.title')

    @property
    def searched_products_title(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('heading', name='Searched Products'))

    @property
    def search_input(self) -> BaseElement:
        return self.find_element('#search_product')

    @property
    def search_button(self) -> BaseElement:
        return self.find_element('#submit_search')

    @property
    def product_cards(self) -> BaseElement:
        return self.find_element(ProductCard.selector)

    @property
    def product_names(self) -> BaseElement:
        return self.find_element(f'{ProductCard.selector} .productinfo p')

    def product_card(self, index: int) -> ProductCard:
        return ProductCard(self.page, locator=self.product_cards.raw.nth(index), timeout=self.timeout)

    def _card(self, index: Optional[int], rng: Optional[random.Random] = None) -> tuple[int, ProductCard]:
        if self.product_cards.count == 0:
            self.product_cards.nth(0).wait_until_visible()
        index = pick_product_index(self.product_cards.count, index, rng)
        card = self.product_card(index)
        card.element.scroll_into_view()
        card.wait_for_load()
        return index, card

    @step()
    def open(self) -> 'ProductsPage':
        self.goto('/products')
        return self

    @step()
    def assert_products_exist(self) -> None:
        self.product_cards.nth(0).wait_until_visible()
        count = self.product_cards.count
        assert count > 2, f'Expected more than 2 products, got {count}'

    @step()
    def select_product(self, index: Optional[int] = None, rng: Optional[random.Random] = None) -> ProductInfo:
        """
        Read name and price of a product card without acting on it.

        Args:
            index: Zero-based card index. Without it a random card other than the first one is used.
            rng: Random generator for the implicit choice.
        """
        index, card = self._card(index, rng)
        return card.info(index)

    @step()
    def add_to_cart(self, index: Optional[int] = None, rng: Optional[random.Random] = None) -> ProductInfo:
        """
        Add one piece of a product to the cart straight from the listing.

        Returns:
            ProductInfo: Name, price and index of the product that was added.
        """
        index, card = self._card(index, rng)
        product = card.info(index)
        card.element.hover()
        card.add_to_cart_button.click()
        return product

    @step()
    def open_product_page(self, index: Optional[int] = None, rng: Optional[random.Random] = None) -> int:
        """
        Open the detail page of a product.

        Returns:
            int: Index of the product that was opened.
        """
        index, card = self._card(index, rng)
        card.view_product_link.click()
        return index

    @step()
    def assert_search_exist(self) -> None:
        self.search_input.wait_until_visible()
        self.search_button.wait_until_visible()

    @step()
    def search_product(self, keyword: str) -> None:
        self.search_input.fill(keyword)
        self.search_button.click()

    @step()
    def assert_search_results(self, keyword: str) -> None:
        """
        At least one product is listed and every product name contains the keyword, ignoring case.
        """
        self.product_names.nth(0).wait_until_visible()
        names = self.product_names.all_inner_texts()
        mismatches = [name for name in names if keyword.lower() not in name.lower()]
        assert names, f'No products found for "{keyword}"'
        assert not mismatches, f'Products not matching "{keyword}": {mismatches}'

    @step()
    def assert_search_results_empty(self) -> None:
        self.searched_products_title.wait_until_visible()
        count = self.product_cards.count
        assert count == 0, f'Expected no products, got {count}'

    def _assert_title(self, expected: str) -> None:
        actual = self.title.wait_until_visible().inner_text
        assert re.sub(r'\s+', ' ', actual).lower() == expected.lower(), \
            f'Expected products title "{expected}", got "{actual}"'

    @step()
    def assert_category_title(self, category: str, option: str) -> None:
        self._assert_title(f'{category} - {option} Products')

    @step()
    def assert_brand_title(self, brand: str) -> None:
        self._assert_title(f'Brand - {brand} Products')

    @step()
    def assert_products_brand(self, brand: str) -> None:
        """
        The brand page lists at least one product and the brand is selected in the URL.
        """
        self.product_cards.nth(0).wait_until_visible()
        assert self.product_cards.count > 0, f'No products listed for brand "{brand}"'
        self.assert_url(re.compile(rf'/brand_products/({re.escape(brand)}|{re.escape(quote(brand))})$'))
