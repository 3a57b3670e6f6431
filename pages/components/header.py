from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from utils.step import step


class HeaderComponent(BasePage):

    @property
    def unique_element(self) -> BaseElement:
        return self.home_link

    @property
    def home_link(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('link', name='Home'))

    @property
    def user_name(self) -> BaseElement:
        return self.find_element('a:has-text("Logged in as") b')

    @property
    def cart_link(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('link', name='Cart'))

    @property
    def signup_login_link(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('link', name='Signup / Login'))

    @property
    def logout_link(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('link', name='Logout'))

    @step()
    def assert_user_name(self, name: str) -> None:
        """
        The "Logged in as" label shows exactly this name.
        """
        actual = self.user_name.wait_until_visible().inner_text
        assert actual == name, f'Expected logged in user "{name}", got "{actual}"'

    @step()
    def assert_user_logged_in(self) -> None:
        self.user_name.wait_until_visible()
        self.logout_link.wait_until_visible()

    @step()
    def assert_user_logged_out(self) -> None:
        """
        Logged out means the user name element is gone from the DOM, not merely hidden.
        """
        self.user_name.wait_for_count(0)
        self.signup_login_link.wait_until_visible()

    @step()
    def click_logout(self) -> None:
        self.logout_link.click()

    @step()
    def open_cart_page(self) -> None:
        self.cart_link.click()
