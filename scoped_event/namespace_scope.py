"""Namespace-bound shortcuts for attaching and removing listeners."""

from typing import TYPE_CHECKING

from scoped_event import subscription

if TYPE_CHECKING:
    from scoped_event.registry import EventRegistry


class NamespaceScope(object):
    """
    The registry's on/off/once with the namespace argument filled in.

        >>> files = registry.scope('files')
        >>> files.on('saved', print)
    """

    def __init__(self, namespace: str, registry: "EventRegistry") -> None:
        self.namespace = namespace
        self._registry = registry

    def __repr__(self) -> str:
        return f"<NamespaceScope namespace={self.namespace!r}>"

    def on(self, event: str, callback: subscription.CALLBACK) -> None:
        self._registry.on(self.namespace, event, callback)

    def off(self, event: str, callback: subscription.CALLBACK) -> None:
        self._registry.off(self.namespace, event, callback)

    def once(self, event: str, callback: subscription.CALLBACK) -> None:
        self._registry.once(self.namespace, event, callback)
