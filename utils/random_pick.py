import random
from typing import Optional


def pick_product_index(count: int, index: Optional[int] = None, rng: Optional[random.Random] = None) -> int:
    """
    Choose which product card to act on.

    An explicit index is returned unchanged. Without one, a pseudo-random index in
    [1, count - 1] is drawn: the first card is never picked implicitly.

    Args:
        count: Number of product cards currently rendered.
        index: Explicit zero-based index, if the caller wants a specific card.
        rng: Random generator to draw from, pass a seeded one for reproducible runs.

    Raises:
        ValueError: When there are no cards, when there is only one card and no explicit index,
            or when the explicit index is out of range.
    """
    if count < 1:
        raise ValueError('Expected at least one product card')
    if index is not None:
        if not 0 <= index < count:
            raise ValueError(f'Product index {index} is out of range for {count} cards')
        return index

    if count < 2:
        raise ValueError(f'Expected more than one product card to pick from, got {count}')
    # TODO: confirm with the site owners why the first card was avoided and drop the rule if it no longer applies
    return (rng or random).randint(1, count - 1)
