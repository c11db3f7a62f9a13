"""
Emission handles for the event registry.

An Emitter is what the registry hands back when a namespace is claimed. It is
the only way to deliver events for that namespace, and the way to give the
namespace back. The handle keeps no state besides its namespace and the
registry that issued it; whether it still owns the namespace is always asked
of the registry.
"""

from typing import Any
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scoped_event.registry import EventRegistry


class Emitter(object):
    """
    Callable handle bound to one claimed namespace.

    Calling the handle is the same as calling emit():
        >>> emit = registry.register_namespace('files')
        >>> emit('saved', '/tmp/notes.txt')
    """

    def __init__(self, namespace: str, registry: "EventRegistry") -> None:
        self._namespace = namespace
        self._registry = registry

    def __repr__(self) -> str:
        state = "registered" if self.registered else "released"
        return f"<Emitter namespace={self._namespace!r} {state}>"

    def __call__(self, event: str, data: Any = None) -> None:
        self.emit(event, data)

    @property
    def namespace(self) -> str:
        """The namespace this handle was issued for."""
        return self._namespace

    @property
    def registered(self) -> bool:
        """True while this handle still owns its namespace."""
        return self._registry.owns(self)

    def emit(self, event: str, data: Any = None) -> None:
        """
        Deliver an event to every listener of (namespace, event).

        Does nothing once the handle has been de-registered, so holding on to
        a stale handle is harmless.

        Args:
            event (str): The event type within this handle's namespace.
            data (Any): The payload passed to each listener.
        """
        self._registry.deliver(self, event, data)

    def deregister(self) -> None:
        """Give the namespace back to the registry."""
        self._registry.deregister(self)
