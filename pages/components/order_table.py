from typing import Iterable

from playwright.sync_api import Locator, Page

from pages.models import CartItem
from utils.soft_assert import get_soft_assert
from utils.step import step
from utils.table import get_row_line_total, get_row_price, get_row_quantity, row_by_name


class OrderTable:
    """
    Product rows of the cart and of the checkout review. Both pages render the same row markup.
    """
    name_cell_selector = 'td.cart_description a'

    def __init__(self, rows: Locator, page: Page, timeout: int = 10000):
        self.rows = rows
        self.page = page
        self.timeout = timeout

    def row(self, name: str) -> Locator:
        return row_by_name(self.rows, self.page.locator(self.name_cell_selector), name)

    @step()
    def validate_cart_items(self, expected: Iterable[CartItem]) -> int:
        """
        Compare every expected item with its row and sum the line totals shown on the page.

        The row count is a hard check; price, quantity and line total of each item are soft
        checks, so one wrong value does not hide the others.

        Returns:
            int: Sum of the rendered line totals, independent of whether they matched.
        """
        expected = list(expected)
        self.rows.first.wait_for(state='visible', timeout=self.timeout)
        row_count = self.rows.count()
        assert row_count == len(expected), f'Expected {len(expected)} rows in the order table, got {row_count}'

        soft_assert = get_soft_assert()
        cart_total = 0
        for item in expected:
            row = self.row(item.name)
            row.wait_for(state='visible', timeout=self.timeout)

            ui_price = get_row_price(row)
            ui_quantity = get_row_quantity(row)
            ui_line_total = get_row_line_total(row)

            soft_assert.check(ui_price == item.price,
                              f'Price for "{item.name}" should be {item.price}, got {ui_price}')
            soft_assert.check(ui_quantity == item.quantity,
                              f'Quantity for "{item.name}" should be {item.quantity}, got {ui_quantity}')
            soft_assert.check(ui_line_total == item.line_total,
                              f'Line total for "{item.name}" should be {item.line_total}, got {ui_line_total}')
            cart_total += ui_line_total
        return cart_total
