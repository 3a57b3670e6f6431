from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from utils.step import step


class HomePage(BasePage):

    @property
    def unique_element(self) -> BaseElement:
        return self.find_element('.logo')

    @property
    def signup_login_link(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('link', name='Signup / Login'))

    @step()
    def open(self) -> 'HomePage':
        """
        Open the home page and wait until it is rendered.
        """
        self.goto('/')
        self.wait_for_load()
        return self

    @step()
    def click_signup_login_link(self) -> None:
        self.signup_login_link.click()
