"""
Required for static type checkers to accept these names as members of the
scoped_event module.

This module gets imported into the scoped_event module so stubs are accessible
through the scoped_event namespace.

The doc strings for each function exist in the stubs for intellisense
fetching, instead of within the module class itself because the module class
is a module replacement at runtime, so the namespaces during inspection are
different.
"""

import os
from typing import Optional
from typing import Union

from scoped_event import emitter
from scoped_event import errors
from scoped_event import handlers
from scoped_event import namespace_scope
from scoped_event import subscription


# -----Read-only Properties----------------------------------------------------

namespaces: list[str]
"""Claimed namespaces, in claim order. Always starts with 'event-core'."""

error: errors.ErrorTaxonomy
"""The error kinds raised by the registry, e.g. scoped_event.error.exists."""


# -----General Stubs-----------------------------------------------------------


def reset() -> None:
    """
    Drop every claim and subscription and start over with a fresh
    'event-core' channel, default notify flags and the default exception
    handler.
    """


# noinspection PyUnusedLocal
def set_flag_states(
    on_register: bool = True,
    on_deregister: bool = True,
    on_subscribe: bool = True,
    on_subscribe_once: bool = True,
    on_unsubscribe: bool = True,
) -> None:
    """
    Turn the 'event-core' notification for each kind of registry activity on
    or off. Every notification is on by default.

    Args:
        on_register:        if True, emit 'register' whenever a namespace is claimed;
        on_deregister:      if True, emit 'de-register' whenever a namespace is released;
        on_subscribe:       if True, emit 'on' whenever on() attaches a callback;
        on_subscribe_once:  if True, emit 'once' whenever once() attaches a callback;
        on_unsubscribe:     if True, emit 'off' whenever a subscription is removed;
    """


# noinspection PyUnusedLocal
def set_listener_exception_handler(
    handler: Optional[handlers.LISTENER_EXCEPTION_HANDLER],
) -> None:
    """
    Set the exception handler for listener errors.
    The handler is called when a listener raises an exception during emit.

    Args:
        Optional[handlers.LISTENER_EXCEPTION_HANDLER]:
            Callable with signature (CALLBACK, str, str, Exception) -> bool.
            Returns True to stop delivery, False to continue.
            Pass None to re-raise listener exceptions.
    """


def to_dict() -> dict:
    """Convert the claimed namespaces and subscriptions to a dictionary."""


def to_string() -> str:
    """Returns a string representation of the registry."""


# noinspection PyUnusedLocal
def export(filepath: Union[str, os.PathLike]) -> None:
    """Export the registry structure to filepath."""


# -----Namespace Stubs---------------------------------------------------------


# noinspection PyUnusedLocal
def register_namespace(namespace: str) -> emitter.Emitter:
    """
    Claim a namespace and get the handle used to emit events in it.

    Args:
        namespace (str): The namespace to claim.
    Returns:
        emitter.Emitter: Call it as emit(event, data) to deliver an event,
            call emit.deregister() to give the namespace back.
    Raises:
        InvalidNamespaceError: If namespace is not a str.
        NamespaceClaimedError: If the namespace is already claimed.
    Example:
        >>> emit = scoped_event.register_namespace('files')
        >>> emit('saved', '/tmp/notes.txt')
        >>> emit.deregister()
    """


def get_namespaces() -> list[str]:
    """Claimed namespaces, in claim order."""


# noinspection PyUnusedLocal
def is_claimed(namespace: str) -> bool:
    """Check if a namespace is currently claimed by an emitter."""


# -----Subscription Stubs------------------------------------------------------


# noinspection PyUnusedLocal
def on(namespace: str, event: str, callback: subscription.CALLBACK) -> None:
    """
    Attach a callback to an event type within a namespace.

    Args:
        namespace (str): The namespace to listen to.
        event (str): The event type within the namespace.
        callback (CALLBACK): Called with the payload of each emission.
    Raises:
        MissingArgumentsError: If an argument is None.
        InvalidNamespaceError: If namespace is not a str.
        InvalidEventError: If event is not a str.
        InvalidCallbackError: If callback is not callable.
        DuplicateCallbackError: If the callback is already attached to this
            namespace and event.
    """


# noinspection PyUnusedLocal
def once(namespace: str, event: str, callback: subscription.CALLBACK) -> None:
    """
    Attach a callback that is removed right after its first delivery.
    Same arguments and errors as on().
    """


# noinspection PyUnusedLocal
def off(namespace: str, event: str, callback: subscription.CALLBACK) -> None:
    """
    Remove a callback from an event type within a namespace.
    Nothing happens if the callback is not attached. Arguments are validated
    as in on().
    """


# noinspection PyUnusedLocal
def listener_count(namespace: str, event: Optional[str] = None) -> int:
    """
    Get the number of attached listeners.

    Args:
        namespace (str): The namespace to count.
        event (Optional[str]): The event type to count. When omitted every
            event type of the namespace is counted.
    Returns:
        int: The number of listeners, 0 if there are none.
    """


# noinspection PyUnusedLocal
def is_subscribed(namespace: str, event: str, callback: subscription.CALLBACK) -> bool:
    """Check if a callback is attached to a namespace and event."""


# noinspection PyUnusedLocal
def scope(namespace: str) -> namespace_scope.NamespaceScope:
    """
    Get on/off/once shortcuts for a single namespace.

    Example:
        >>> files = scoped_event.scope('files')
        >>> files.on('saved', print)
        >>> files.off('saved', print)
    """
