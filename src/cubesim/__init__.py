"""Interactive 3x3x3 puzzle cube simulator"""

import functools
import logging

__version__ = "0.1.0"


def catch_and_return(return_value=None):
    """
    An exception escaping a Qt slot or event handler takes the whole application down.
    Handlers wrapped with this log the error and return return_value instead
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception:
                logging.exception(f"Error in {func.__qualname__}")
                return return_value

        return wrapper

    return decorator


catch_errors = catch_and_return(None)
