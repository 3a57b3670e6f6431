from functools import cached_property

from playwright.sync_api import Page

from pages.auth.account_created_page import AccountCreatedPage
from pages.auth.login_signup_page import LoginSignupPage
from pages.auth.signup_page import SignupPage
from pages.components.brand import BrandComponent
from pages.components.cart_modal import CartModal
from pages.components.category import CategoryComponent
from pages.components.checkout_modal import CheckoutModal
from pages.components.consent_dialog import ConsentDialog
from pages.components.header import HeaderComponent
from pages.home_page import HomePage
from pages.shop.cart_page import CartPage
from pages.shop.checkout_page import CheckoutPage
from pages.shop.payment_page import PaymentPage
from pages.shop.product_page import ProductPage
from pages.shop.products_page import ProductsPage


class Pages:
    """
    Provides access to all pages and components of one browser page, grouped by logical sections.

    Every page object is created on first access and cached, so the same property
    always returns the same instance for this Pages object.
    """

    def __init__(self, page: Page):
        self.page = page

    # Authentication
    @cached_property
    def home(self) -> HomePage:
        return HomePage(self.page)

    @cached_property
    def login_signup_page(self) -> LoginSignupPage:
        return LoginSignupPage(self.page)

    @cached_property
    def signup_page(self) -> SignupPage:
        return SignupPage(self.page)

    @cached_property
    def account_created_page(self) -> AccountCreatedPage:
        return AccountCreatedPage(self.page)

    # Shop
    @cached_property
    def products(self) -> ProductsPage:
        return ProductsPage(self.page)

    @cached_property
    def product(self) -> ProductPage:
        return ProductPage(self.page)

    @cached_property
    def cart(self) -> CartPage:
        return CartPage(self.page)

    @cached_property
    def checkout(self) -> CheckoutPage:
        return CheckoutPage(self.page)

    @cached_property
    def payment(self) -> PaymentPage:
        return PaymentPage(self.page)

    # Components
    @cached_property
    def consent_dialog(self) -> ConsentDialog:
        return ConsentDialog(self.page)

    @cached_property
    def header(self) -> HeaderComponent:
        return HeaderComponent(self.page)

    @cached_property
    def cart_modal(self) -> CartModal:
        return CartModal(self.page)

    @cached_property
    def checkout_modal(self) -> CheckoutModal:
        return CheckoutModal(self.page)

    @cached_property
    def category_component(self) -> CategoryComponent:
        return CategoryComponent(self.page)

    @cached_property
    def brand_component(self) -> BrandComponent:
        return BrandComponent(self.page)
