import inspect
import logging
import time
from functools import wraps

import pytest

logger = logging.getLogger(__name__)

# Low level calls that are only worth logging when they are slow
TO_EXCLUDE = ['click', 'fill', 'check', 'select_option', 'wait_until_hidden', 'wait_until_visible',
              'wait_for_count']

SLOW_CALL_SECONDS = 5
VERY_SLOW_CALL_SECONDS = 10


def current_test_item():
    return getattr(pytest, 'current_item', None)


def record_execution(item, name: str, func_type: str, level: int, start_time: float,
                     always: bool = True, details: str = '') -> float:
    """
    Append a timing line for a finished call to the item's execution log.

    Args:
        item: The running pytest item.
        name: Display name of the call.
        func_type: 'fixture', 'step' or 'function'.
        level: Nesting depth, rendered as indentation.
        start_time: perf_counter value taken before the call.
        always: When False the entry is only kept for calls slower than SLOW_CALL_SECONDS.
        details: Optional suffix, e.g. the locator the call acted on.

    Returns:
        float: The measured execution time in seconds.
    """
    execution_time = time.perf_counter() - start_time
    if not always and execution_time <= SLOW_CALL_SECONDS:
        return execution_time

    if execution_time > VERY_SLOW_CALL_SECONDS:
        logger.warning(f"{name} took over {VERY_SLOW_CALL_SECONDS} seconds to execute: {execution_time:.4f} seconds")

    if not hasattr(item, 'execution_log'):
        item.execution_log = []
    indent = '  ' * level
    label = f"{name}({details})" if details else name
    item.execution_log.insert(0, (start_time, f"{indent}{func_type} - {label}: {execution_time:.4f} seconds"))
    return execution_time


def track_execution_time(func):
    """
    Decorator to measure the execution time of element actions and fixtures
    and log the details (name and time) in the HTML report.

    Functions in the TO_EXCLUDE list are only logged if their execution time exceeds 5 seconds.
    All other functions are logged regardless of execution time.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        item = current_test_item()
        if not item:
            return func(*args, **kwargs)

        if not hasattr(item, 'call_stack'):
            item.call_stack = []

        function_name = func.__name__
        path = inspect.stack()[1].filename
        func_type = 'fixture' if 'conftest' in path or 'fixture' in path else 'function'
        level = len(item.call_stack)
        item.call_stack.append(function_name)

        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            details = ''
            if function_name in TO_EXCLUDE and args and hasattr(args[0], 'raw'):
                details = str(args[0].raw)
            record_execution(item, function_name, func_type, level, start_time,
                             always=function_name not in TO_EXCLUDE, details=details)
            item.call_stack.pop()

    return wrapper
