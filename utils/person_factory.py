from dataclasses import dataclass, replace
from typing import Optional

from faker import Faker

GENDER_TITLES = ('Mr.', 'Mrs.')
COUNTRIES = ('United States', 'Canada', 'India', 'Australia', 'New Zealand', 'Israel', 'Singapore')
MONTHS = ('January', 'February', 'March', 'April', 'May', 'June', 'July', 'August', 'September',
          'October', 'November', 'December')

EMAIL_SUFFIX_LETTERS = 'abcdefghijklmnopqrstuvwxyz0123456789'

fake = Faker('en_US')


@dataclass(frozen=True)
class Person:
    """
    Identity used to register and check out as a new customer.
    """
    title: str
    name: str
    email: str
    password: str
    day: str
    month: str
    year: str
    first_name: str
    last_name: str
    company: str
    address1: str
    address2: str
    country: str
    state: str
    city: str
    zipcode: str
    mobile: str
    newsletter: bool = False
    offers: bool = False

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'


def create_person(seed: Optional[int] = None, **overrides) -> Person:
    """
    Generate a random Person with Faker, optionally overriding single fields.

    Args:
        seed: Seed for a dedicated Faker instance. The same seed always gives the same person.
        **overrides: Field values that replace the generated ones.

    Example:
        create_person(country='Canada', newsletter=True)
    """
    generator = fake
    if seed is not None:
        generator = Faker('en_US')
        generator.seed_instance(seed)

    first_name = generator.first_name()
    last_name = generator.last_name()
    # Addresses must be unused on the site, the suffix keeps them apart between runs
    suffix = generator.lexify('????????', letters=EMAIL_SUFFIX_LETTERS)
    birthdate = generator.date_of_birth(minimum_age=18, maximum_age=65)

    person = Person(
        title=generator.random_element(GENDER_TITLES),
        name=first_name,
        email=f'{first_name}.{last_name}.{suffix}@{generator.safe_domain_name()}'.lower(),
        password=generator.password(length=12),
        day=str(birthdate.day),
        month=MONTHS[birthdate.month - 1],
        year=str(birthdate.year),
        first_name=first_name,
        last_name=last_name,
        company=generator.company(),
        address1=generator.street_address(),
        address2=generator.secondary_address(),
        country=generator.random_element(COUNTRIES),
        state=generator.state(),
        city=generator.city(),
        zipcode=generator.zipcode(),
        mobile=generator.phone_number(),
    )
    return replace(person, **overrides)
