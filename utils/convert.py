import re

_NON_DIGITS = re.compile(r'[^\d]')


def to_number(text: str) -> int:
    """
    Convert a displayed amount such as "Rs. 1,500" to an integer.

    Every non-digit character is dropped; text without digits converts to 0.
    """
    digits = _NON_DIGITS.sub('', text or '')
    return int(digits) if digits else 0
