"""
Step reporting for page object methods.

Every public page object action is wrapped with @step(), which
- opens an allure step named "ClassName.method_name" (or the explicit name),
- writes a timing line to the current test's execution log,
- remembers the innermost step that raised, so the report can name the failing step.
"""
import time
from functools import wraps
from typing import Callable, Optional

import allure

from utils.track_time import current_test_item, record_execution


def current_step() -> Optional[str]:
    """
    Name of the innermost step currently running in this test, if any.
    """
    item = current_test_item()
    steps = getattr(item, 'step_stack', None) if item else None
    return steps[-1] if steps else None


def step(name: Optional[str] = None) -> Callable:
    """
    Decorate a page object method so it is reported as a named step.

    Args:
        name: Explicit step title. Defaults to "<ClassName>.<method_name>" of the instance.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            step_name = name or f'{type(self).__name__}.{func.__name__}'
            item = current_test_item()
            if item is None:
                with allure.step(step_name):
                    return func(self, *args, **kwargs)

            if not hasattr(item, 'step_stack'):
                item.step_stack = []
            if not hasattr(item, 'call_stack'):
                item.call_stack = []

            level = len(item.call_stack)
            item.step_stack.append(step_name)
            item.call_stack.append(step_name)
            start_time = time.perf_counter()
            try:
                with allure.step(step_name):
                    return func(self, *args, **kwargs)
            except BaseException:
                # The innermost step wins: outer steps see the attribute already set
                if not getattr(item, 'failed_step', None):
                    item.failed_step = step_name
                raise
            finally:
                record_execution(item, step_name, 'step', level, start_time)
                item.call_stack.pop()
                item.step_stack.pop()

        return wrapper

    return decorator
