from functools import wraps
from typing import Callable

_unset = object()


def run_once(func: Callable) -> Callable:
    """
    Restrict ``func`` to a single execution. Later calls return the first result, whatever their arguments.

    :param func: The decorated function
    """
    result = _unset

    @wraps(func)
    def wrapper(*args, **kwargs):
        nonlocal result

        if result is _unset:
            result = func(*args, **kwargs)

        return result

    def reset() -> None:
        nonlocal result
        result = _unset

    wrapper.reset = reset

    return wrapper
