from playwright.sync_api import Locator

from utils.convert import to_number

PRICE_CELL = 'td.cart_price p'
QUANTITY_CELL = 'td.cart_quantity button.disabled'
LINE_TOTAL_CELL = 'td.cart_total p.cart_total_price'


def row_by_name(rows: Locator, name_cell: Locator, name: str) -> Locator:
    """
    Return the first row that holds a product name cell with the given text.

    Args:
        rows: Locator matching every row of the table.
        name_cell: Unscoped locator of the product name cell, filtered by text here.
        name: Visible product name.
    """
    return rows.filter(has=name_cell.filter(has_text=name)).first


def _cell_number(row: Locator, selector: str) -> int:
    return to_number(row.locator(selector).inner_text().strip())


def get_row_price(row: Locator) -> int:
    return _cell_number(row, PRICE_CELL)


def get_row_quantity(row: Locator) -> int:
    return _cell_number(row, QUANTITY_CELL)


def get_row_line_total(row: Locator) -> int:
    return _cell_number(row, LINE_TOTAL_CELL)
