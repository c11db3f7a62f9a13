"""
What to do when a listener raises.

The registry calls its listener exception handler with the failing callback,
the (namespace, event) pair being emitted and the exception. The handler's
return value decides whether the rest of the snapshot still gets the payload.

The registry starts with log_and_continue_listener_exception. Install another
with set_listener_exception_handler(), or pass None to let the exception
escape from the emit call.
"""

import logging
import sys
from typing import Callable

from scoped_event import subscription


logger = logging.getLogger(__name__)


LISTENER_EXCEPTION_HANDLER = Callable[
    [subscription.CALLBACK, str, str, Exception], bool
]
"""
(callback, namespace, event, exception) -> bool

True ends the emission. False moves on to the next listener.
"""

STOP = True
CONTINUE = False


def get_callable_name(callable_: Callable, qualified: bool = False) -> str:
    """
    Human readable label for a callback.

    Bound methods read as 'Owner.method'. Other callables use their __name__,
    or 'module.qualname' when qualified is set. Anything without a name falls
    back to str().
    """
    if hasattr(callable_, "__self__") and hasattr(callable_, "__name__"):
        return f"{type(callable_.__self__).__name__}.{callable_.__name__}"

    if qualified and hasattr(callable_, "__qualname__"):
        module = getattr(callable_, "__module__", None) or "<unknown>"
        return f"{module}.{callable_.__qualname__}"

    if hasattr(callable_, "__name__"):
        return callable_.__name__

    return str(callable_)


def stop_and_log_listener_exception(
    callback: subscription.CALLBACK, namespace: str, event: str, exception: Exception
) -> bool:
    """Log with traceback at ERROR, then end the emission."""
    logger.error(
        f"{namespace}/{event}: listener {get_callable_name(callback)} failed, "
        f"emission stopped ({exception.__class__.__name__}: {exception})",
        exc_info=True,
    )
    return STOP


def log_and_continue_listener_exception(
    callback: subscription.CALLBACK, namespace: str, event: str, exception: Exception
) -> bool:
    """Default. One WARNING line, then the next listener runs."""
    logger.warning(
        f"{namespace}/{event}: listener {get_callable_name(callback)} failed, "
        f"skipping to next ({exception.__class__.__name__}: {exception})"
    )
    return CONTINUE


def silent_listener_exception(
    _: subscription.CALLBACK, __: str, ___: str, ____: Exception
) -> bool:
    return CONTINUE


exceptions_caught = []


def collect_listener_exception(
    callback: subscription.CALLBACK, namespace: str, event: str, exception: Exception
) -> bool:
    """
    Record each failure in the module level exceptions_caught list and keep
    going. Entries hold the callback label, namespace, event, a
    'Type: message' string and the sys.exc_info() triple.

    The list is never cleared here. Empty it yourself between runs.
    """
    exceptions_caught.append(
        {
            "callback": get_callable_name(callback),
            "namespace": namespace,
            "event": event,
            "exception": f"{exception.__class__.__name__}: {exception}",
            "exc_info": sys.exc_info(),
        }
    )
    return CONTINUE
