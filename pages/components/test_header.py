from unittest.mock import MagicMock

import pytest

from pages.common import base_element
from pages.components.checkout_modal import CheckoutModal
from pages.components.header import HeaderComponent

USER_NAME = 'a:has-text("Logged in as") b'


@pytest.fixture
def browser_page():
    page = MagicMock()
    locators = {}
    page.locator.side_effect = lambda selector: locators.setdefault(selector, MagicMock(name=selector))
    return page


@pytest.fixture
def mock_expect(monkeypatch):
    expect = MagicMock()
    monkeypatch.setattr(base_element, 'expect', expect)
    return expect


@pytest.mark.unit
class TestHeaderComponent:

    def test_logged_out_means_no_user_name_in_dom(self, browser_page, mock_expect):
        HeaderComponent(browser_page, timeout=1000).assert_user_logged_out()

        user_name = browser_page.locator(USER_NAME)
        mock_expect.assert_called_once_with(user_name)
        mock_expect.return_value.to_have_count.assert_called_once_with(0, timeout=1000)
        user_name.wait_for.assert_not_called()
        browser_page.get_by_role.assert_called_with('link', name='Signup / Login')
        browser_page.get_by_role.return_value.wait_for.assert_called_once_with(state='visible', timeout=1000)

    def test_hidden_user_name_is_not_logged_out(self, browser_page, mock_expect):
        mock_expect.return_value.to_have_count.side_effect = AssertionError('Locator expected to have count "0"')

        with pytest.raises(AssertionError, match='count "0"'):
            HeaderComponent(browser_page, timeout=1000).assert_user_logged_out()

    def test_assert_user_name(self, browser_page):
        browser_page.locator(USER_NAME).inner_text.return_value = ' Ada '

        HeaderComponent(browser_page, timeout=1000).assert_user_name('Ada')

    def test_assert_user_name_is_exact(self, browser_page):
        browser_page.locator(USER_NAME).inner_text.return_value = 'Ada Lovelace'

        with pytest.raises(AssertionError, match='Expected logged in user "Ada", got "Ada Lovelace"'):
            HeaderComponent(browser_page, timeout=1000).assert_user_name('Ada')

    def test_open_cart_page(self, browser_page):
        HeaderComponent(browser_page, timeout=1000).open_cart_page()

        browser_page.get_by_role.assert_called_with('link', name='Cart')
        browser_page.get_by_role.return_value.click.assert_called_once_with(timeout=1000, force=False)


@pytest.mark.unit
class TestCheckoutModal:

    def test_open_register_link(self, browser_page):
        CheckoutModal(browser_page, timeout=1000).open_register_link()

        root = browser_page.locator('#checkoutModal')
        root.get_by_role.assert_called_once_with('link', name='Register / Login')
        root.get_by_role.return_value.click.assert_called_once_with(timeout=1000, force=False)

    def test_register_link_missing(self, browser_page):
        browser_page.locator('#checkoutModal').get_by_role.return_value.is_visible.return_value = False

        with pytest.raises(AssertionError, match='no visible "Register / Login" link'):
            CheckoutModal(browser_page, timeout=1000).assert_register_link()
