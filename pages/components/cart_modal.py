from pages.common.base_component import BaseComponent
from pages.common.base_element import BaseElement
from utils.step import step


class CartModal(BaseComponent):
    """
    "Added!" overlay shown after a product is put in the cart.
    """
    selector = '#cartModal'

    @property
    def continue_shopping_button(self) -> BaseElement:
        return self.child_by_role('button', 'Continue Shopping')

    @property
    def view_cart_link(self) -> BaseElement:
        return self.child_by_role('link', 'View Cart')

    @step()
    def wait_for_load(self, timeout=None) -> 'CartModal':
        return super().wait_for_load(timeout)

    @step()
    def open_cart(self) -> None:
        self.wait_for_load()
        self.view_cart_link.click()

    @step()
    def continue_shopping(self) -> None:
        self.wait_for_load()
        self.continue_shopping_button.click()
        self.wait_for_invisibility()
