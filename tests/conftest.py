from pathlib import Path

import pytest

UI_TESTS_DIR = Path(__file__).parent


# Everything under tests/ drives a real browser
@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(items):
    for item in items:
        if UI_TESTS_DIR in item.path.parents:
            item.add_marker(pytest.mark.ui)
