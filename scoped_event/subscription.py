"""
Subscription data structures and type definitions for the event registry.

Defines the Subscription dataclass which records one callback attached to a
(namespace, event) pair, and whether it should be dropped after its first
delivery. Also defines the CALLBACK type alias used throughout the registry
for type hints.
"""

import types
from dataclasses import dataclass
from typing import Any
from typing import Callable

CALLBACK = Callable[[Any], Any]
"""
The end point that event data is forwarded to. Receives the emitted payload
as its only argument.

The registry discards whatever the callback returns.
If you want data back, emit an event going the opposite direction.
"""


@dataclass(frozen=True, eq=False)
class Subscription(object):
    """
    A callback attached to one event type within one namespace.

    Compared by identity so that two attachments of the same callback, one
    removed and one re-added, are never mistaken for each other.
    """

    namespace: str
    """The namespace the subscription listens to."""

    event: str
    """The event type within the namespace."""

    callback: CALLBACK
    """What gets ran when the event is emitted."""

    once: bool = False
    """If True the subscription is removed right after its first delivery."""

    def matches(self, namespace: str, event: str, callback: CALLBACK) -> bool:
        """Check if this subscription was made for the given triple."""
        return (
            self.namespace == namespace
            and self.event == event
            and same_callback(self.callback, callback)
        )


def same_callback(first: CALLBACK, second: CALLBACK) -> bool:
    """
    Check if two callbacks are the same object.

    Bound methods are rebuilt on every attribute access, so `obj.method` is
    never the same object twice. They match when they bind the same function
    to the same instance. Callable objects that only compare equal do not
    match.
    """
    if first is second:
        return True

    if isinstance(first, types.MethodType) and isinstance(second, types.MethodType):
        return first.__self__ is second.__self__ and first.__func__ is second.__func__

    if isinstance(first, types.BuiltinMethodType) and isinstance(
        second, types.BuiltinMethodType
    ):
        # e.g. some_list.append
        return first.__self__ is second.__self__ and first.__name__ == second.__name__

    return False
