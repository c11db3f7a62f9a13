"""
# Event Registry

The registry owns the two tables the scoped event system is built on: the
namespaces currently claimed by emitters, and the subscriptions attached to
(namespace, event) pairs. Producers claim a namespace and get an Emitter back;
consumers attach callbacks with on() / once() and remove them with off().

The registry reports on itself through an ordinary namespace, 'event-core',
claimed while the registry is constructed. Every claim, release, subscribe and
unsubscribe is emitted there, so listening to the registry works exactly like
listening to anything else.

The scoped_event module exposes one process-wide instance. Construct your own
EventRegistry for isolated use, e.g. in tests.
"""

import json
import logging
import os
from typing import Any
from typing import Optional
from typing import Union

from scoped_event import emitter
from scoped_event import errors
from scoped_event import handlers
from scoped_event import namespace_scope
from scoped_event import store
from scoped_event import subscription


logger = logging.getLogger(__name__)


# -----Core Channel------------------------------------------------------------
CORE_NAMESPACE = "event-core"

CORE_ON_REGISTER = "register"
CORE_ON_DEREGISTER = "de-register"
CORE_ON_SUBSCRIBE = "on"
CORE_ON_SUBSCRIBE_ONCE = "once"
CORE_ON_UNSUBSCRIBE = "off"
# -----------------------------------------------------------------------------


def _validate_arguments(namespace: Any, event: Any, callback: Any) -> None:
    """
    Check the argument types shared by on(), once() and off().

    Raises:
        MissingArgumentsError: If any argument is None.
        InvalidNamespaceError: If namespace is not a str.
        InvalidEventError: If event is not a str.
        InvalidCallbackError: If callback is not callable.
    """
    if namespace is None or event is None or callback is None:
        raise errors.MissingArgumentsError()
    if not isinstance(namespace, str):
        raise errors.InvalidNamespaceError()
    if not isinstance(event, str):
        raise errors.InvalidEventError()
    if not callable(callback):
        raise errors.InvalidCallbackError()


class EventRegistry(object):
    """
    Namespaced publish/subscribe registry.

    To publish, claim a namespace with register_namespace() and call the
    returned Emitter. Release it with Emitter.deregister().

    To listen use on(), once() and off(), or scope() for a view with the
    namespace filled in.

    Emission is synchronous. Listeners of a (namespace, event) pair run in the
    order they subscribed, against a copy of the listener list taken when the
    emission starts.
    """

    def __init__(
        self,
        core_namespace: str = CORE_NAMESPACE,
        exception_handler: Optional[
            handlers.LISTENER_EXCEPTION_HANDLER
        ] = handlers.log_and_continue_listener_exception,
    ) -> None:
        self._core_namespace = core_namespace
        self._default_exception_handler = exception_handler

        self._emitters: dict[str, emitter.Emitter] = {}
        """Claimed namespaces, in claim order, mapped to their owning handle."""

        self._store = store.SubscriptionStore()

        self._core: Optional[emitter.Emitter] = None
        self._listener_exception_handler: Optional[
            handlers.LISTENER_EXCEPTION_HANDLER
        ] = exception_handler

        # -----Notifies-----
        self.notify_on_register: bool = True
        self.notify_on_deregister: bool = True
        self.notify_on_subscribe: bool = True
        self.notify_on_subscribe_once: bool = True
        self.notify_on_unsubscribe: bool = True

        self._bootstrap()

    def _bootstrap(self) -> None:
        """Claim the core namespace. Nothing is announced for this claim."""
        self._core = None
        self._core = self.register_namespace(self._core_namespace)

    def reset(self) -> None:
        """
        Drop every claim and subscription and start over with a fresh core
        channel, default notify flags and the default exception handler.

        Emitters issued before the reset stop working.
        """
        self._store.clear()
        self._emitters.clear()
        self._listener_exception_handler = self._default_exception_handler
        self.set_flag_states()
        self._bootstrap()
        logger.debug("Event registry reset")

    @property
    def core_namespace(self) -> str:
        return self._core_namespace

    @property
    def error(self) -> errors.ErrorTaxonomy:
        """The error kinds raised by the registry."""
        return errors.ERRORS

    # -----Namespace Management------------------------------------------------

    def register_namespace(self, namespace: str) -> emitter.Emitter:
        """
        Claim a namespace and get the handle used to emit events in it.

        Args:
            namespace (str): The namespace to claim.
        Returns:
            emitter.Emitter: The handle owning the namespace.
        Raises:
            InvalidNamespaceError: If namespace is not a str.
            NamespaceClaimedError: If the namespace is already claimed.
        Notes:
            Emits 'register' on the core channel with the namespace.
        """
        if not isinstance(namespace, str):
            raise errors.InvalidNamespaceError()
        if namespace in self._emitters:
            raise errors.NamespaceClaimedError(
                f"Namespace '{namespace}' is already claimed"
            )

        handle = emitter.Emitter(namespace, self)
        self._emitters[namespace] = handle
        logger.debug(f"Namespace claimed: {namespace}")

        self._notify(self.notify_on_register, CORE_ON_REGISTER, namespace)
        return handle

    def deregister(self, handle: emitter.Emitter) -> None:
        """
        Release the namespace owned by a handle.

        Does nothing if the handle no longer owns its namespace, so a stale
        handle cannot release a claim made after it was de-registered.

        Notes:
            Emits 'de-register' on the core channel with the namespace.
        """
        if not self.owns(handle):
            return

        del self._emitters[handle.namespace]
        logger.debug(f"Namespace released: {handle.namespace}")

        self._notify(self.notify_on_deregister, CORE_ON_DEREGISTER, handle.namespace)

    def owns(self, handle: emitter.Emitter) -> bool:
        """True if the handle is the current owner of its namespace."""
        return self._emitters.get(handle.namespace) is handle

    def is_claimed(self, namespace: str) -> bool:
        return namespace in self._emitters

    @property
    def namespaces(self) -> list[str]:
        """Claimed namespaces, in claim order."""
        return list(self._emitters)

    def get_namespaces(self) -> list[str]:
        """Claimed namespaces, in claim order."""
        return self.namespaces

    # -----Subscription Management---------------------------------------------

    def on(self, namespace: str, event: str, callback: subscription.CALLBACK) -> None:
        """
        Attach a callback to an event type within a namespace.

        Args:
            namespace (str): The namespace to listen to.
            event (str): The event type within the namespace.
            callback (CALLBACK): Called with the payload of each emission.
        Raises:
            MissingArgumentsError, InvalidNamespaceError, InvalidEventError,
            InvalidCallbackError: If an argument is missing or of the wrong
                type.
            DuplicateCallbackError: If the callback is already attached to
                this namespace and event.
        Notes:
            Emits 'on' on the core channel with the new Subscription.
        """
        _validate_arguments(namespace, event, callback)
        self._add(subscription.Subscription(namespace, event, callback, once=False))

    def once(
        self, namespace: str, event: str, callback: subscription.CALLBACK
    ) -> None:
        """
        Attach a callback that is removed right after its first delivery.

        Same arguments and errors as on().

        Notes:
            Emits 'once' on the core channel with the new Subscription.
        """
        _validate_arguments(namespace, event, callback)
        self._add(subscription.Subscription(namespace, event, callback, once=True))

    def off(self, namespace: str, event: str, callback: subscription.CALLBACK) -> None:
        """
        Remove a callback from an event type within a namespace.

        Nothing happens if the callback is not attached. The arguments are
        validated as in on().

        Notes:
            Emits 'off' on the core channel with the removed Subscription.
        """
        _validate_arguments(namespace, event, callback)
        sub = self._store.remove(namespace, event, callback)
        if sub is not None:
            self._notify(self.notify_on_unsubscribe, CORE_ON_UNSUBSCRIBE, sub)

    def _add(self, sub: subscription.Subscription) -> None:
        self._store.add(sub)

        if sub.once:
            self._notify(self.notify_on_subscribe_once, CORE_ON_SUBSCRIBE_ONCE, sub)
        else:
            self._notify(self.notify_on_subscribe, CORE_ON_SUBSCRIBE, sub)

    def _discard(self, sub: subscription.Subscription) -> None:
        if self._store.discard(sub):
            self._notify(self.notify_on_unsubscribe, CORE_ON_UNSUBSCRIBE, sub)

    def scope(self, namespace: str) -> namespace_scope.NamespaceScope:
        """
        Get on/off/once shortcuts for a single namespace.

        Args:
            namespace (str): The namespace every call on the view targets.
        Returns:
            namespace_scope.NamespaceScope: A stateless view forwarding to this
                registry.
        """
        return namespace_scope.NamespaceScope(namespace, self)

    def listener_count(self, namespace: str, event: Optional[str] = None) -> int:
        """
        Get the number of attached listeners.

        Args:
            namespace (str): The namespace to count.
            event (Optional[str]): The event type to count. When omitted every
                event type of the namespace is counted.
        Returns:
            int: The number of listeners, 0 if there are none.
        """
        return self._store.count(namespace, event)

    def is_subscribed(
        self, namespace: str, event: str, callback: subscription.CALLBACK
    ) -> bool:
        return self._store.find(namespace, event, callback) is not None

    def set_listener_exception_handler(
        self, handler: Optional[handlers.LISTENER_EXCEPTION_HANDLER]
    ) -> None:
        """
        Set the exception handler for listener errors.
        The handler is called when a listener raises an exception during emit.

        Args:
            Optional[handlers.LISTENER_EXCEPTION_HANDLER]:
                Callable with signature (CALLBACK, str, str, Exception) -> bool.
                Returns True to stop delivery, False to continue.
                Pass None to re-raise listener exceptions, which abandons the
                rest of the emission pass.
        """
        self._listener_exception_handler = handler

    # -----Emission------------------------------------------------------------

    def deliver(self, handle: emitter.Emitter, event: str, data: Any) -> None:
        """
        Run every listener of (handle.namespace, event) with data.

        Emitter.emit() is the public way in. Nothing happens when the handle
        does not own its namespace.

        The listener list is copied before the first callback runs: listeners
        added during the pass wait for the next emission, and listeners removed
        during the pass still receive this one. One-shot subscriptions are
        removed as soon as their callback returns or raises.
        """
        if not self.owns(handle):
            return

        for sub in self._store.snapshot(handle.namespace, event):
            try:
                sub.callback(data)
            except Exception as e:
                if self._listener_exception_handler is None:
                    raise

                stop = self._listener_exception_handler(
                    sub.callback, sub.namespace, event, e
                )
                if stop:
                    break
            finally:
                if sub.once:
                    self._discard(sub)

    def _notify(self, flag: bool, event: str, data: Any) -> None:
        """Emit on the core channel if the flag is set and the channel is up."""
        if flag and self._core is not None:
            self._core.emit(event, data)

    # -----Notifies------------------------------------------------------------

    def set_flag_states(
        self,
        on_register: bool = True,
        on_deregister: bool = True,
        on_subscribe: bool = True,
        on_subscribe_once: bool = True,
        on_unsubscribe: bool = True,
    ) -> None:
        """
        Turn the core channel notification for each kind of registry activity
        on or off. Every notification is on by default.

        Args:
            on_register:        if True, emit 'register' whenever a namespace is claimed;
            on_deregister:      if True, emit 'de-register' whenever a namespace is released;
            on_subscribe:       if True, emit 'on' whenever on() attaches a callback;
            on_subscribe_once:  if True, emit 'once' whenever once() attaches a callback;
            on_unsubscribe:     if True, emit 'off' whenever a subscription is removed;
        """
        self.notify_on_register = on_register
        self.notify_on_deregister = on_deregister
        self.notify_on_subscribe = on_subscribe
        self.notify_on_subscribe_once = on_subscribe_once
        self.notify_on_unsubscribe = on_unsubscribe

    # -----Introspection-------------------------------------------------------

    def to_dict(self) -> dict:
        """Convert the claimed namespaces and subscriptions to a dictionary."""
        subscriptions = {}
        for namespace in self._store:
            events = {}
            for event in self._store.events(namespace):
                listeners = []
                for sub in self._store.snapshot(namespace, event):
                    info = handlers.get_callable_name(sub.callback, qualified=True)
                    once_str = " [once]" if sub.once else ""
                    listeners.append(f"{info}{once_str}")
                events[event] = listeners
            subscriptions[namespace] = events

        return {"namespaces": self.namespaces, "subscriptions": subscriptions}

    def to_string(self) -> str:
        """Returns a string representation of the registry."""
        return json.dumps(self.to_dict(), indent=4)

    def export(self, filepath: Union[str, os.PathLike]) -> None:
        """Export the registry structure to filepath."""
        with open(filepath, "w") as outfile:
            json.dump(self.to_dict(), outfile, indent=4)
