"""Observer contract for components that react to bus events."""

from dataclasses import dataclass, field

from weight_tracker.domain.events import EventKind
from weight_tracker.services.event_bus import EventBus, EventCallback, Subscription


@dataclass
class SubscriptionGroup:
    """Subscriptions that are released together."""

    bus: EventBus
    subscriptions: list[Subscription] = field(default_factory=list)

    def observe(self, kind: EventKind, callback: EventCallback) -> Subscription:
        """Subscribe and keep the handle for later release."""
        subscription = self.bus.subscribe(kind, callback)
        self.subscriptions.append(subscription)
        return subscription

    def release(self) -> None:
        """Cancel every held subscription."""
        subscriptions, self.subscriptions = self.subscriptions, []
        for subscription in subscriptions:
            subscription.cancel()

    def __len__(self) -> int:
        return len(self.subscriptions)

    def __enter__(self) -> "SubscriptionGroup":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.release()


class NotificationObserver:
    """Base class for screens and components that observe the event bus.

    Subclasses implement ``setup_notification_observers`` using
    ``self.observe``. Every handle registered that way is released by
    ``remove_notification_observers``. Using the observer as a context
    manager runs setup on entry and removal on exit.
    """

    def __init__(self, bus: EventBus) -> None:
        self._subscriptions = SubscriptionGroup(bus)

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    def observe(self, kind: EventKind, callback: EventCallback) -> Subscription:
        return self._subscriptions.observe(kind, callback)

    def setup_notification_observers(self) -> None:
        """Subscribe to the events this component needs."""
        raise NotImplementedError

    def remove_notification_observers(self) -> None:
        """Release every subscription registered through ``observe``."""
        self._subscriptions.release()

    def __enter__(self) -> "NotificationObserver":
        self.setup_notification_observers()
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.remove_notification_observers()
