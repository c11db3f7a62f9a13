"""
Subscription table for the event registry.

The table is a two level mapping of namespace -> event -> subscriptions, kept
in insertion order. Event and namespace keys are pruned as soon as they hold
no subscriptions, so the key set only ever reflects live subscriptions. Which
namespaces are claimed by emitters is tracked separately by the registry.
"""

from typing import Iterator
from typing import Optional

from scoped_event import errors
from scoped_event import subscription


class SubscriptionStore(object):
    """Ordered storage of subscriptions keyed by namespace and event."""

    def __init__(self) -> None:
        self._table: dict[str, dict[str, list[subscription.Subscription]]] = {}

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._table))

    def clear(self) -> None:
        self._table.clear()

    def find(
        self, namespace: str, event: str, callback: subscription.CALLBACK
    ) -> Optional[subscription.Subscription]:
        """
        Find the live subscription for a (namespace, event, callback) triple.

        Returns:
            Optional[subscription.Subscription]: The subscription, or None if
                the callback is not attached to the pair.
        """
        for sub in self._table.get(namespace, {}).get(event, []):
            if sub.matches(namespace, event, callback):
                return sub

        return None

    def add(self, sub: subscription.Subscription) -> None:
        """
        Append a subscription to the end of its (namespace, event) list.

        Raises:
            DuplicateCallbackError: If the callback is already attached to the
                same pair.
        """
        if self.find(sub.namespace, sub.event, sub.callback) is not None:
            raise errors.DuplicateCallbackError()

        events = self._table.setdefault(sub.namespace, {})
        events.setdefault(sub.event, []).append(sub)

    def remove(
        self, namespace: str, event: str, callback: subscription.CALLBACK
    ) -> Optional[subscription.Subscription]:
        """
        Remove the subscription matching the triple, if there is one.

        Returns:
            Optional[subscription.Subscription]: The removed subscription, or
                None if nothing matched.
        """
        sub = self.find(namespace, event, callback)
        if sub is None:
            return None

        self.discard(sub)
        return sub

    def discard(self, sub: subscription.Subscription) -> bool:
        """
        Remove exactly this subscription record.

        A different record for the same triple (one that was removed and
        re-added) is left in place.

        Returns:
            bool: True if the record was live and has been removed.
        """
        subs = self._table.get(sub.namespace, {}).get(sub.event)
        if not subs:
            return False

        for index, item in enumerate(subs):
            if item is sub:
                del subs[index]
                self._prune(sub.namespace, sub.event)
                return True

        return False

    def _prune(self, namespace: str, event: str) -> None:
        """Drop empty event and namespace entries."""
        events = self._table[namespace]
        if not events[event]:
            del events[event]
        if not events:
            del self._table[namespace]

    def snapshot(self, namespace: str, event: str) -> list[subscription.Subscription]:
        """
        Copy of the current subscription list for a pair, in firing order.
        Changes made to the table afterwards do not affect the copy.
        """
        return list(self._table.get(namespace, {}).get(event, []))

    def events(self, namespace: str) -> list[str]:
        """Event types with at least one subscription in a namespace."""
        return list(self._table.get(namespace, {}))

    def count(self, namespace: str, event: Optional[str] = None) -> int:
        """
        Count live subscriptions.

        Args:
            namespace (str): Namespace to count.
            event (Optional[str]): Restrict the count to this event type. When
                omitted every event type in the namespace is counted.
        Returns:
            int: The number of subscriptions, 0 if nothing is attached.
        """
        events = self._table.get(namespace)
        if events is None:
            return 0

        if event is not None:
            return len(events.get(event, []))

        return sum(len(subs) for subs in events.values())
