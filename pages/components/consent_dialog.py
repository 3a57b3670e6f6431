import logging

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from pages.common.base_element import BaseElement
from pages.common.base_page import BasePage
from utils.step import step

logger = logging.getLogger(__name__)


class ConsentDialog(BasePage):

    @property
    def unique_element(self) -> BaseElement:
        return self.consent_button

    @property
    def consent_button(self) -> BaseElement:
        return self.find_element(self.page.get_by_role('button', name='Consent'))

    @step()
    def accept_if_visible(self, timeout: int = 1500) -> bool:
        """
        Accept the cookie consent dialog if it shows up within the timeout.

        :return: True if the dialog was accepted, False if it never appeared.
        """
        try:
            self.consent_button.wait_until_visible(timeout=timeout)
        except PlaywrightTimeoutError:
            logger.debug('Consent dialog did not appear')
            return False
        self.consent_button.click()
        return True
