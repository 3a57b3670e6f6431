from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from utils.step import step


class AccountCreatedPage(BasePage):
    SUCCESS_MESSAGE = 'Account Created!'

    @property
    def unique_element(self) -> BaseElement:
        return self.find_element('[data-qa="account-created"]')

    @property
    def continue_button(self) -> BaseElement:
        return self.find_element('[data-qa="continue-button"]')

    @step()
    def assert_success_message(self) -> None:
        with self.soft_assert:
            actual = self.unique_element.text
            assert actual == self.SUCCESS_MESSAGE, f'Expected "{self.SUCCESS_MESSAGE}", got "{actual}"'

    @step()
    def click_continue_button(self) -> None:
        self.continue_button.click()
