from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from utils.step import step


class LoginSignupPage(BasePage):

    @property
    def unique_element(self) -> BaseElement:
        return self.find_element('.signup-form')

    @property
    def new_user_signup_heading(self) -> BaseElement:
        return self.find_element(self.unique_element.raw.get_by_role('heading', name='New User Signup!'))

    @property
    def name_input(self) -> BaseElement:
        return self.find_element('[data-qa="signup-name"]')

    @property
    def email_input(self) -> BaseElement:
        return self.find_element('[data-qa="signup-email"]')

    @property
    def signup_button(self) -> BaseElement:
        return self.find_element('[data-qa="signup-button"]')

    @property
    def login_email_input(self) -> BaseElement:
        return self.find_element('[data-qa="login-email"]')

    @property
    def login_password_input(self) -> BaseElement:
        return self.find_element('[data-qa="login-password"]')

    @property
    def login_button(self) -> BaseElement:
        return self.find_element('[data-qa="login-button"]')

    @step()
    def wait_for_load(self, timeout=None) -> 'LoginSignupPage':
        super().wait_for_load(timeout)
        with self.soft_assert:
            assert self.new_user_signup_heading.is_visible, '"New User Signup!" heading is not visible'
        return self

    @step()
    def open(self) -> 'LoginSignupPage':
        self.goto('/login')
        return self

    @step()
    def enter_name_and_email(self, name: str, email: str) -> None:
        self.name_input.fill(name)
        self.email_input.fill(email)

    @step()
    def click_signup_button(self) -> None:
        self.signup_button.click()

    @step()
    def login(self, email: str, password: str) -> None:
        """
        Fill the login form and submit it in one go.
        """
        self.login_email_input.fill(email)
        self.login_password_input.fill(password)
        self.login_button.click()
