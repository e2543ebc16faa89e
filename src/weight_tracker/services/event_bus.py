"""In-process publish/subscribe event bus."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from weight_tracker.domain.events import (
    Event,
    EventKind,
    EventPayload,
    check_payload,
)

_logger = logging.getLogger(__name__)

EventCallback = Callable[[Event], None]


@dataclass(eq=False)
class Subscription:
    """Handle for a single registration on the bus.

    Cancelling is idempotent. Used as a context manager, the subscription is
    cancelled when the block exits.
    """

    bus: "EventBus"
    kind: EventKind
    callback: EventCallback
    active: bool = field(default=True, init=False)

    def cancel(self) -> None:
        """Remove this registration from the bus."""
        self.bus.unsubscribe(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.cancel()


class EventBus:
    """Synchronous fan-out of events to subscribers in registration order."""

    def __init__(self) -> None:
        self._subscribers: dict[EventKind, list[Subscription]] = {}
        self._lock = threading.RLock()

    def subscribe(self, kind: EventKind, callback: EventCallback) -> Subscription:
        """Register ``callback`` for ``kind`` and return its handle."""
        subscription = Subscription(bus=self, kind=kind, callback=callback)
        with self._lock:
            self._subscribers.setdefault(kind, []).append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a registration; unknown or cancelled handles are ignored."""
        if subscription.bus is not self:
            return
        with self._lock:
            subscribers = self._subscribers.get(subscription.kind, [])
            for index, candidate in enumerate(subscribers):
                if candidate is subscription:
                    del subscribers[index]
                    break
            subscription.active = False

    def subscriber_count(self, kind: EventKind) -> int:
        """Return the number of live registrations for ``kind``."""
        with self._lock:
            return len(self._subscribers.get(kind, []))

    def publish(self, kind: EventKind, payload: EventPayload | None = None) -> None:
        """Deliver an event to every subscriber of ``kind``.

        A subscriber that raises is logged and skipped; the remaining
        subscribers still receive the event.
        """
        check_payload(kind, payload)
        event = Event(kind=kind, payload=payload)
        with self._lock:
            snapshot = list(self._subscribers.get(kind, []))
            for subscription in snapshot:
                if not subscription.active:
                    continue
                try:
                    subscription.callback(event)
                except Exception:
                    _logger.exception(
                        "Event subscriber failed: kind=%s callback=%r",
                        kind.value,
                        subscription.callback,
                    )
