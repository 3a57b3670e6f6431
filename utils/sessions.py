"""
sessions.py

Stored login sessions shared between pytest-xdist workers, and the two ways of getting a
fresh customer: the signup form or the account API followed by a UI login.

Each worker logs one user in once per run and writes the browser storage state to
.auth/user-<index>.json. Tests that need a logged in user open a new context from that file
instead of logging in again. Every worker only ever writes its own file, so the pool must have
a slot per worker.
"""
import logging
import re
from pathlib import Path
from typing import NamedTuple, Union

import pytest
from playwright.sync_api import APIRequestContext, Browser, TimeoutError as PlaywrightTimeoutError

from pages import Pages
from pages.common.intercept import block_ads
from utils.person_factory import Person
from utils.users import get_user_by_index

logger = logging.getLogger(__name__)

_WORKER_ID = re.compile(r'^gw(\d+)$')
CREATE_ACCOUNT_PATH = '/api/createAccount'


class NewUser(NamedTuple):
    pages: Pages
    person: Person


def worker_index(worker_id: str) -> int:
    """
    Convert a pytest-xdist worker id ("gw0", "gw1", ...) to its number. The controller ("master") is 0.
    """
    match = _WORKER_ID.match(worker_id or '')
    if match:
        return int(match.group(1))
    if worker_id in ('', 'master'):
        return 0
    raise ValueError(f'Unexpected xdist worker id: {worker_id!r}')


def session_index(worker: int, pool_size: int) -> int:
    """
    Pick the stored session a worker uses: worker index modulo the number of sessions.
    """
    if pool_size < 1:
        raise ValueError(f'Session pool size must be at least 1, got {pool_size}')
    return worker % pool_size


def session_slot(worker_id: str, pool_size: int) -> int:
    """
    Session slot of a worker, refusing pools smaller than the number of workers.

    Two workers on one slot would log the same user in and write the same session file
    while the other one reads it.

    Raises:
        pytest.UsageError: If the worker has no slot of its own.
    """
    worker = worker_index(worker_id)
    if worker >= pool_size:
        raise pytest.UsageError(
            f'Worker {worker_id} has no stored session of its own: WORKERS_COUNT={pool_size} '
            f'must be at least the number of xdist workers'
        )
    return session_index(worker, pool_size)


def storage_state_path(index: int, auth_dir: Union[str, Path] = '.auth') -> Path:
    return Path(auth_dir) / f'user-{index}.json'


def provision_session(browser: Browser, base_url: str, index: int, env_name: str = 'dev',
                      auth_dir: Union[str, Path] = '.auth') -> Path:
    """
    Log a pool user in through the UI and store the session state for later contexts.

    Args:
        browser: Browser to open a throwaway context in.
        base_url: Root URL of the site.
        index: Session slot; also selects the user (index modulo number of users).
        env_name: Test data set to take the user from.
        auth_dir: Folder for the session files.

    Returns:
        Path: File the storage state was written to.
    """
    user = get_user_by_index(index, env_name)
    path = storage_state_path(index, auth_dir)
    path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f'Logging in {user.key} to store session #{index} in {path}')
    context = block_ads(browser.new_context(base_url=base_url))
    try:
        pages = Pages(context.new_page())
        pages.login_signup_page.open()
        pages.consent_dialog.accept_if_visible()
        pages.login_signup_page.login(user.email, user.password)
        try:
            pages.header.wait_for_load()
            pages.header.assert_user_logged_in()
        except (AssertionError, PlaywrightTimeoutError) as e:
            raise AssertionError(
                f'Could not log {user.email} in on {base_url}. The accounts in test_data/{env_name}/users.json '
                f'must exist on the site: {e}'
            ) from e
        context.storage_state(path=str(path))
    finally:
        context.close()
    return path


def register_new_user(pages: Pages, person: Person) -> NewUser:
    """
    Sign a new customer up through the UI and leave the browser logged in as them.
    """
    logger.info(f'Registering new user {person.email}')
    pages.home.open()
    pages.consent_dialog.accept_if_visible()
    pages.home.click_signup_login_link()
    pages.login_signup_page.wait_for_load()
    pages.login_signup_page.enter_name_and_email(person.name, person.email)
    pages.login_signup_page.click_signup_button()
    pages.login_signup_page.assert_url('/signup')
    pages.signup_page.wait_for_load()
    pages.signup_page.fill_form(person)
    pages.signup_page.click_create_account_button()
    pages.account_created_page.wait_for_load()
    pages.account_created_page.assert_success_message()
    pages.account_created_page.click_continue_button()
    pages.header.wait_for_load()
    pages.header.assert_user_name(person.name)
    return NewUser(pages, person)


def api_base_url(base_url: str) -> str:
    """
    The account API answers on the bare domain, without the "www." of the shop.
    """
    return base_url.replace('www.', '', 1).rstrip('/')


def registration_form_data(person: Person) -> dict[str, str]:
    """
    Form fields of the createAccount API for this person.
    """
    return {
        'name': person.name,
        'email': person.email,
        'password': person.password,
        'title': person.title,
        'birth_date': person.day,
        'birth_month': person.month,
        'birth_year': person.year,
        'firstname': person.first_name,
        'lastname': person.last_name,
        'company': person.company,
        'address1': person.address1,
        'address2': person.address2,
        'country': person.country,
        'zipcode': person.zipcode,
        'state': person.state,
        'city': person.city,
        'mobile_number': person.mobile,
    }


def create_account_via_api(request: APIRequestContext, base_url: str, person: Person) -> None:
    """
    Register a person through the account API instead of the signup form.

    The API answers HTTP 200 for handled errors and puts the real status in "responseCode".

    Raises:
        RuntimeError: If the account was not created.
    """
    url = f'{api_base_url(base_url)}{CREATE_ACCOUNT_PATH}'
    logger.info(f'Creating user {person.email} through {url}')
    response = request.post(url, form=registration_form_data(person))
    if not response.ok:
        raise RuntimeError(f'Failed to create user {person.email}: HTTP {response.status}')
    body = response.json()
    if body.get('responseCode') != 201:
        raise RuntimeError(f'Failed to create user {person.email}: {body.get("message")}')


def login_registered_user(pages: Pages, person: Person) -> NewUser:
    """
    Log an existing customer in through the UI and check the header greets them.
    """
    pages.home.open()
    pages.consent_dialog.accept_if_visible()
    pages.home.click_signup_login_link()
    pages.login_signup_page.wait_for_load()
    pages.login_signup_page.login(person.email, person.password)
    pages.header.wait_for_load()
    pages.header.assert_user_name(person.name)
    return NewUser(pages, person)
