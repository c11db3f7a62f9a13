"""
# Scoped Event

Herein is the process-wide event registry exposed as a module class, creating
a protective closure around the registry instance so its namespace and
subscription tables cannot be reached or replaced from outside.

A reimport protection clause exists at the top of the file to prevent the
registry from being lost on import.

Function stubs exist in the stubs file for static type checkers to validate
correct calls.

Producers claim a namespace and emit through the returned handle:
    >>> import scoped_event
    >>> emit = scoped_event.register_namespace('files')
    >>> emit('saved', '/tmp/notes.txt')

Consumers attach to a (namespace, event) pair:
    >>> scoped_event.on('files', 'saved', print)

For isolated registries, e.g. in tests, construct scoped_event.EventRegistry.
"""

# Remember to update doc strings in the stub.py file so static type checkers
# and intellisense can receive accurate feedback!

import sys

# -----------------------------------------------------------------------------
# Prevent module reload - registry tables would be lost!
if "scoped_event" in sys.modules:
    existing_module = sys.modules["scoped_event"]
    if hasattr(existing_module, "_SCOPED_EVENT_IMPORT_GUARD"):
        raise ImportError(
            "Module 'scoped_event' has already been imported and cannot be "
            "reloaded. Namespace and subscriber data would be lost. "
            "Restart your Python session to reimport."
        )
_SCOPED_EVENT_IMPORT_GUARD = True
# -----------------------------------------------------------------------------

import os
from types import ModuleType
from typing import Optional
from typing import Union

from scoped_event.stub import *
from scoped_event import emitter
from scoped_event import errors
from scoped_event import handlers
from scoped_event import namespace_scope
from scoped_event import registry
from scoped_event import store
from scoped_event import subscription


version_major = 1
version_minor = 0
version_patch = 0
__version__ = f"{version_major}.{version_minor}.{version_patch}"

_REGISTRY = registry.EventRegistry()
"""
Process-wide registry.
Claims 'event-core' on construction, before any caller can register.
"""


class ScopedEvent(ModuleType):
    """
    Process-wide namespaced publish/subscribe registry.

    To publish, claim a namespace with register_namespace() and call the
    returned handle with (event, data). Release it with handle.deregister().

    To listen use on(), once() and off(), or scope() for the same three calls
    with the namespace filled in.

    Registry activity is emitted on the 'event-core' namespace as 'register',
    'de-register', 'on', 'once' and 'off' events.
    """

    # -----Runtime Closures----------------------------------------------------
    # ---Constants---
    __version__ = __version__
    _SCOPED_EVENT_IMPORT_GUARD = _SCOPED_EVENT_IMPORT_GUARD
    # Explicitly refuse to make closure for _REGISTRY so it stays protected!

    # ---Exceptions---
    ScopedEventError = errors.ScopedEventError
    MissingArgumentsError = errors.MissingArgumentsError
    InvalidCallbackError = errors.InvalidCallbackError
    DuplicateCallbackError = errors.DuplicateCallbackError
    NamespaceClaimedError = errors.NamespaceClaimedError
    InvalidNamespaceError = errors.InvalidNamespaceError
    InvalidEventError = errors.InvalidEventError

    # ---Core Channel---
    CORE_NAMESPACE = registry.CORE_NAMESPACE
    CORE_ON_REGISTER = registry.CORE_ON_REGISTER
    CORE_ON_DEREGISTER = registry.CORE_ON_DEREGISTER
    CORE_ON_SUBSCRIBE = registry.CORE_ON_SUBSCRIBE
    CORE_ON_SUBSCRIBE_ONCE = registry.CORE_ON_SUBSCRIBE_ONCE
    CORE_ON_UNSUBSCRIBE = registry.CORE_ON_UNSUBSCRIBE

    # ---Types---
    EventRegistry = registry.EventRegistry
    Emitter = emitter.Emitter
    NamespaceScope = namespace_scope.NamespaceScope
    Subscription = subscription.Subscription

    # ---Modules---
    emitter = emitter
    errors = errors
    handlers = handlers
    namespace_scope = namespace_scope
    registry = registry
    store = store
    subscription = subscription
    # -------------------------------------------------------------------------

    def __init__(self, name: str) -> None:
        super().__init__(name)
        assert self._SCOPED_EVENT_IMPORT_GUARD is True

    # -----Read-only Properties------------------------------------------------

    @property
    def namespaces(self) -> list[str]:
        return _REGISTRY.namespaces

    @property
    def error(self) -> errors.ErrorTaxonomy:
        return _REGISTRY.error

    # -----General-------------------------------------------------------------

    @staticmethod
    def reset() -> None:
        _REGISTRY.reset()

    @staticmethod
    def set_flag_states(
        on_register: bool = True,
        on_deregister: bool = True,
        on_subscribe: bool = True,
        on_subscribe_once: bool = True,
        on_unsubscribe: bool = True,
    ) -> None:
        _REGISTRY.set_flag_states(
            on_register=on_register,
            on_deregister=on_deregister,
            on_subscribe=on_subscribe,
            on_subscribe_once=on_subscribe_once,
            on_unsubscribe=on_unsubscribe,
        )

    @staticmethod
    def set_listener_exception_handler(
        handler: Optional[handlers.LISTENER_EXCEPTION_HANDLER],
    ) -> None:
        _REGISTRY.set_listener_exception_handler(handler)

    @staticmethod
    def to_dict() -> dict:
        return _REGISTRY.to_dict()

    @staticmethod
    def to_string() -> str:
        return _REGISTRY.to_string()

    @staticmethod
    def export(filepath: Union[str, os.PathLike]) -> None:
        _REGISTRY.export(filepath)

    # -----Namespaces----------------------------------------------------------

    @staticmethod
    def register_namespace(namespace: str) -> emitter.Emitter:
        return _REGISTRY.register_namespace(namespace)

    @staticmethod
    def get_namespaces() -> list[str]:
        return _REGISTRY.get_namespaces()

    @staticmethod
    def is_claimed(namespace: str) -> bool:
        return _REGISTRY.is_claimed(namespace)

    # -----Subscriptions-------------------------------------------------------

    @staticmethod
    def on(namespace: str, event: str, callback: subscription.CALLBACK) -> None:
        _REGISTRY.on(namespace, event, callback)

    @staticmethod
    def once(namespace: str, event: str, callback: subscription.CALLBACK) -> None:
        _REGISTRY.once(namespace, event, callback)

    @staticmethod
    def off(namespace: str, event: str, callback: subscription.CALLBACK) -> None:
        _REGISTRY.off(namespace, event, callback)

    @staticmethod
    def listener_count(namespace: str, event: Optional[str] = None) -> int:
        return _REGISTRY.listener_count(namespace, event)

    @staticmethod
    def is_subscribed(
        namespace: str, event: str, callback: subscription.CALLBACK
    ) -> bool:
        return _REGISTRY.is_subscribed(namespace, event, callback)

    @staticmethod
    def scope(namespace: str) -> namespace_scope.NamespaceScope:
        return _REGISTRY.scope(namespace)


# This is here to protect _REGISTRY, creating a protective closure.
custom_module = ScopedEvent(sys.modules[__name__].__name__)
sys.modules[__name__] = custom_module
