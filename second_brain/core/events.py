"""
Event source interface the plugin subscribes to, plus an in-process bus.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

# Event names
MODIFY = "modify"
DELETE = "delete"
RENAME = "rename"
EDITOR_CHANGE = "editor-change"


@dataclass(frozen=True)
class Subscription:
    event: str
    callback: Callable[..., Any]
    id: int


class IEventSource(ABC):
    """Abstract source of vault and editor events."""

    @abstractmethod
    def subscribe(self, event: str, callback: Callable[..., Any]) -> Subscription:
        """Register a callback for an event name."""
        pass

    @abstractmethod
    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a previously registered callback."""
        pass


class EventBus(IEventSource):
    """Synchronous in-process event source.

    Callbacks run in subscription order on the emitting thread; their return
    values are collected and returned by emit.
    """

    def __init__(self):
        self._subscriptions: Dict[str, List[Subscription]] = {}
        self._next_id = 0

    def subscribe(self, event: str, callback: Callable[..., Any]) -> Subscription:
        subscription = Subscription(event=event, callback=callback, id=self._next_id)
        self._next_id += 1
        self._subscriptions.setdefault(event, []).append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        handlers = self._subscriptions.get(subscription.event, [])
        if subscription in handlers:
            handlers.remove(subscription)

    def emit(self, event: str, *args, **kwargs) -> List[Any]:
        # Copy so handlers may unsubscribe while being called
        handlers = list(self._subscriptions.get(event, []))
        return [s.callback(*args, **kwargs) for s in handlers]

    def subscriber_count(self, event: str) -> int:
        return len(self._subscriptions.get(event, []))
