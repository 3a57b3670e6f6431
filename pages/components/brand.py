from typing import Iterable, Mapping, Union

from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from utils.step import step


class BrandComponent(BasePage):
    """
    Left sidebar list of brands.
    """

    @property
    def unique_element(self) -> BaseElement:
        return self.brand_panel

    @property
    def brand_panel(self) -> BaseElement:
        return self.find_element('.brands_products')

    def brand_link(self, brand: str) -> BaseElement:
        return self.find_element(self.page.locator('.brands-name a').filter(has_text=brand).first)

    @step()
    def assert_brand_panel_exists(self) -> None:
        self.brand_panel.wait_until_visible()

    @step()
    def verify_brands_list(self, brands: Union[Mapping[str, str], Iterable[str]]) -> None:
        names = brands.values() if isinstance(brands, Mapping) else brands
        for brand in names:
            self.brand_link(brand).wait_until_visible()

    @step()
    def select_brand(self, brand: str) -> str:
        self.brand_link(brand).click()
        return brand
