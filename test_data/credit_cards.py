from dataclasses import dataclass


@dataclass(frozen=True)
class CreditCard:
    number: str
    month: str
    year: str
    cvc: str


CREDIT_CARDS = {
    'valid': CreditCard(number='4242424242424242', month='12', year='2029', cvc='123'),
    'invalid': CreditCard(number='4000000000000002', month='12', year='2024', cvc='123'),
}
