import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

TEST_DATA_DIR = Path(__file__).resolve().parent.parent / 'test_data'


@dataclass(frozen=True)
class User:
    key: str
    email: str
    password: str


@lru_cache(maxsize=None)
def get_users(env_name: str = 'dev') -> tuple[User, ...]:
    """
    Load the registered users of an environment from test_data/<env_name>/users.json.

    The accounts must already exist on the site; the dev file only ships placeholders.
    """
    users_file = TEST_DATA_DIR / env_name / 'users.json'
    with open(users_file, encoding='utf-8') as f:
        users = tuple(User(**user) for user in json.load(f)['users'])
    if not users:
        raise ValueError(f'No users defined in {users_file}')
    return users


def get_user_by_index(index: int, env_name: str = 'dev') -> User:
    users = get_users(env_name)
    return users[index % len(users)]
