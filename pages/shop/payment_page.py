import re
from pathlib import Path

from playwright.sync_api import Download

from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from test_data.credit_cards import CreditCard
from utils.person_factory import Person
from utils.step import step


class PaymentPage(BasePage):

    @property
    def unique_element(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('heading', name='Payment'))

    @property
    def name_on_card_input(self) -> BaseElement:
        return self.find_element('[data-qa="name-on-card"]')

    @property
    def card_number_input(self) -> BaseElement:
        return self.find_element('[data-qa="card-number"]')

    @property
    def cvc_input(self) -> BaseElement:
        return self.find_element('[data-qa="cvc"]')

    @property
    def expiry_month_input(self) -> BaseElement:
        return self.find_element('[data-qa="expiry-month"]')

    @property
    def expiry_year_input(self) -> BaseElement:
        return self.find_element('[data-qa="expiry-year"]')

    @property
    def pay_button(self) -> BaseElement:
        return self.find_element('[data-qa="pay-button"]')

    @property
    def order_placed_title(self) -> BaseElement:
        return self.find_element('[data-qa="order-placed"] b')

    @property
    def order_placed_message(self) -> BaseElement:
        return self.find_element(self.page.get_by_text('Congratulations! Your order has been confirmed!'))

    @property
    def download_invoice_link(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('link', name='Download Invoice'))

    @property
    def continue_button(self) -> BaseElement:
        return self.find_element('[data-qa="continue-button"]')

    @step()
    def enter_credit_card(self, card: CreditCard, person: Person) -> None:
        self.name_on_card_input.fill(person.full_name)
        self.card_number_input.fill(card.number)
        self.cvc_input.fill(card.cvc)
        self.expiry_month_input.fill(card.month)
        self.expiry_year_input.fill(card.year)

    @step()
    def click_pay_confirm(self) -> None:
        self.pay_button.click()

    @step()
    def assert_order_placed(self) -> None:
        title = self.order_placed_title.wait_until_visible().inner_text
        self.soft_assert.check(re.search(r'order placed!', title, re.IGNORECASE) is not None,
                               f'Expected "Order Placed!" title, got "{title}"')
        self.soft_assert.check(self.order_placed_message.is_visible, 'Order confirmation message is not visible')

    @step()
    def click_download_invoice(self) -> Download:
        """
        Click "Download Invoice" while already listening for the download, so the event is never missed.
        """
        with self.page.expect_download(timeout=self.timeout) as download_info:
            self.download_invoice_link.click()
        return download_info.value

    @step()
    def click_continue(self) -> None:
        self.continue_button.click()

    @step()
    def assert_invoice_valid(self, download: Download, customer: Person, amount: int) -> None:
        """
        The downloaded invoice mentions the customer's full name and the paid amount.
        """
        path = download.path()
        assert path, f'Invoice "{download.suggested_filename}" was not saved'
        content = Path(path).read_text(encoding='utf-8')
        self.soft_assert.check(customer.full_name in content,
                               f'Invoice does not mention "{customer.full_name}": {content!r}')
        self.soft_assert.check(str(amount) in content, f'Invoice does not mention amount {amount}: {content!r}')
