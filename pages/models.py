from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProductInfo:
    """
    Product as shown on the listing or detail page. Prices are whole rupees.
    """
    name: str
    price: int
    index: Optional[int] = None


@dataclass(frozen=True)
class CartItem:
    name: str
    price: int
    quantity: int

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    @classmethod
    def from_product(cls, product: ProductInfo, quantity: int = 1) -> 'CartItem':
        return cls(name=product.name, price=product.price, quantity=quantity)
