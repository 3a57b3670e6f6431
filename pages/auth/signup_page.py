from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from utils.person_factory import Person
from utils.step import step


class SignupPage(BasePage):

    @property
    def unique_element(self) -> BaseElement:
        return self.find_element('.login-form')

    @property
    def account_information_heading(self) -> BaseElement:
        return self.find_element(self.unique_element.raw.get_by_role('heading', name='Enter Account Information'))

    def title_radio(self, title: str) -> BaseElement:
        return self.find_element(self.page.get_by_role('radio', name=title))

    @property
    def name_input(self) -> BaseElement:
        return self.find_element('#name')

    @property
    def password_input(self) -> BaseElement:
        return self.find_element('#password')

    @property
    def days_select(self) -> BaseElement:
        return self.find_element('#days')

    @property
    def months_select(self) -> BaseElement:
        return self.find_element('#months')

    @property
    def years_select(self) -> BaseElement:
        return self.find_element('#years')

    @property
    def newsletter_checkbox(self) -> BaseElement:
        return self.find_element('#newsletter')

    @property
    def offers_checkbox(self) -> BaseElement:
        return self.find_element('#optin')

    @property
    def first_name_input(self) -> BaseElement:
        return self.find_element('#first_name')

    @property
    def last_name_input(self) -> BaseElement:
        return self.find_element('#last_name')

    @property
    def company_input(self) -> BaseElement:
        return self.find_element('#company')

    @property
    def address1_input(self) -> BaseElement:
        return self.find_element('#address1')

    @property
    def address2_input(self) -> BaseElement:
        return self.find_element('#address2')

    @property
    def country_select(self) -> BaseElement:
        return self.find_element('#country')

    @property
    def state_input(self) -> BaseElement:
        return self.find_element('#state')

    @property
    def city_input(self) -> BaseElement:
        return self.find_element('#city')

    @property
    def zipcode_input(self) -> BaseElement:
        return self.find_element('#zipcode')

    @property
    def mobile_input(self) -> BaseElement:
        return self.find_element('#mobile_number')

    @property
    def create_account_button(self) -> BaseElement:
        return self.find_element('[data-qa="create-account"]')

    @step()
    def wait_for_load(self, timeout=None) -> 'SignupPage':
        super().wait_for_load(timeout)
        with self.soft_assert:
            assert self.account_information_heading.is_visible, '"Enter Account Information" heading is not visible'
        return self

    @step()
    def fill_form(self, person: Person) -> None:
        """
        Fill every account and address field from the person, top to bottom.
        """
        self.title_radio(person.title).check()
        self.name_input.fill(person.name)
        self.password_input.fill(person.password)
        self.days_select.select_option(person.day)
        self.months_select.select_option(person.month)
        self.years_select.select_option(person.year)
        if person.newsletter:
            self.newsletter_checkbox.check()
        if person.offers:
            self.offers_checkbox.check()
        self.first_name_input.fill(person.first_name)
        self.last_name_input.fill(person.last_name)
        self.company_input.fill(person.company)
        self.address1_input.fill(person.address1)
        self.address2_input.fill(person.address2)
        self.country_select.select_option(person.country)
        self.state_input.fill(person.state)
        self.city_input.fill(person.city)
        self.zipcode_input.fill(person.zipcode)
        self.mobile_input.fill(person.mobile)

    @step()
    def click_create_account_button(self) -> None:
        self.create_account_button.click()
