from typing import Optional

import pytest


class SoftAssertContextManager:
    """
    A context manager for soft assertions in tests.
    Collects assertion failures and allows tests to continue running.

    Usage:
        with soft_assert:
            assert actual == expected, 'Price mismatch'
        soft_assert.check(name in text, f'"{name}" is missing')
    """

    def __init__(self):
        self.failures = []

    def __enter__(self):
        """
        Start the soft assertion context.
        """
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """
        Capture exceptions (assertion failures) and store them.
        """
        if exc_type is AssertionError:
            self._record(str(exc_value), traceback.tb_lineno if traceback else None)
            return True  # Suppress the exception

    def check(self, condition: bool, message: str) -> bool:
        """
        Record a failure without a `with` block when the condition is falsy.

        :return: The condition itself, so callers can branch on it.
        """
        if not condition:
            self._record(message)
        return bool(condition)

    def _record(self, message: str, lineno: Optional[int] = None) -> None:
        from utils.step import current_step

        step_name = current_step()
        prefix = f'{len(self.failures) + 1}.'
        if step_name:
            prefix += f' [{step_name}]'
        if lineno:
            prefix += f' Line: {lineno}.'
        self.failures.append(f'{prefix} \n{message} ')

    def has_failures(self):
        """
        Check if there are any failures recorded.
        """
        return bool(self.failures)

    def get_failures(self):
        """
        Retrieve all recorded failures.
        """
        return self.failures

    def assert_all(self) -> None:
        """
        Raise a single AssertionError listing every recorded failure, then reset.
        """
        if self.failures:
            failures, self.failures = self.failures, []
            raise AssertionError(f'Soft assert failures ({len(failures)}):\n' + '\n'.join(failures))


class HardAssert(SoftAssertContextManager):
    """
    Same interface as the soft variant, but every failure raises immediately.
    Used when no test is running, so checks are never silently lost.
    """

    def __exit__(self, exc_type, exc_value, traceback):
        return False

    def check(self, condition: bool, message: str) -> bool:
        assert condition, message
        return True


def get_soft_assert() -> SoftAssertContextManager:
    """
    Return the soft assertion collector of the currently running test, creating it on first use.
    """
    item = getattr(pytest, 'current_item', None)
    if item is None:
        return HardAssert()
    if not hasattr(item, '_soft_assert'):
        item._soft_assert = SoftAssertContextManager()
    return item._soft_assert
