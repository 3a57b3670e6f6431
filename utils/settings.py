import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_BASE_URL = 'https://automationexercise.com'


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes')


@dataclass(frozen=True)
class Settings:
    """
    Run configuration, read from environment variables once per process.

    Attributes:
        base_url: Root URL of the site under test. Relative navigation resolves against it.
        env_name: Name of the test data set (test_data/<env_name>/users.json).
        workers_count: Number of pre-authenticated sessions, must cover the xdist worker count.
        ci: True when running in CI; enables headless mode and one rerun of failed tests.
        headless: Launch the browser without a window.
        auth_dir: Folder that holds the stored sessions.
        default_timeout: Default Playwright timeout for actions and waits, in milliseconds.
    """
    base_url: str = DEFAULT_BASE_URL
    env_name: str = 'dev'
    workers_count: int = 1
    ci: bool = False
    headless: bool = False
    auth_dir: str = '.auth'
    default_timeout: int = 10000

    @classmethod
    def from_env(cls) -> 'Settings':
        ci = _env_flag('CI') or os.getenv('GITHUB_RUN') is not None
        workers_count = int(os.getenv('WORKERS_COUNT', '1'))
        if workers_count < 1:
            raise ValueError(f'WORKERS_COUNT must be at least 1, got {workers_count}')
        return cls(
            base_url=os.getenv('BASE_URL', DEFAULT_BASE_URL).rstrip('/'),
            env_name=os.getenv('ENV_NAME', 'dev'),
            workers_count=workers_count,
            ci=ci,
            headless=ci or _env_flag('HEADLESS'),
            auth_dir=os.getenv('AUTH_DIR', '.auth'),
            default_timeout=int(os.getenv('DEFAULT_TIMEOUT', '10000')),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
