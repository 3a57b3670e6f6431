from pages.common.base_component import BaseComponent
from pages.common.base_element import BaseElement
from utils.step import step


class CheckoutModal(BaseComponent):
    """
    Overlay asking an anonymous visitor to register or log in before checkout.
    """
    selector = '#checkoutModal'

    @property
    def register_link(self) -> BaseElement:
        return self.child_by_role('link', 'Register / Login')

    @step()
    def wait_for_load(self, timeout=None) -> 'CheckoutModal':
        super().wait_for_load(timeout)
        self.register_link.wait_until_visible(timeout=timeout or self.timeout)
        return self

    @step()
    def assert_register_link(self) -> 'CheckoutModal':
        assert self.register_link.is_visible, 'Checkout modal has no visible "Register / Login" link'
        return self

    @step()
    def open_register_link(self) -> None:
        self.register_link.click()
